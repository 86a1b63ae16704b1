import pytest


@pytest.fixture
def conference_post():
    """POST body for the conference form with one committee row per dict."""

    def _data(committees=None, **fields):
        committees = committees if committees is not None else [
            {"name": "Security Council", "capacity": "2", "countries": "USA\nUK\nFrance"}
        ]
        data = {
            "name_ru": "Алматы MUN",
            "name_en": "Almaty MUN",
            "location": "KBTU",
            "registration_fee_currency": "KZT",
            "languages": "ru\nen",
            "committees-TOTAL_FORMS": str(len(committees)),
            "committees-INITIAL_FORMS": "0",
            "committees-MIN_NUM_FORMS": "1",
            "committees-MAX_NUM_FORMS": "1000",
        }
        for i, committee in enumerate(committees):
            row = {"topic": "", "priority": str(i + 1), "capacity": "15", "countries": "", "languages": ""}
            row.update(committee)
            for key, value in row.items():
                data[f"committees-{i}-{key}"] = value
        data.update(fields)
        return data

    return _data
