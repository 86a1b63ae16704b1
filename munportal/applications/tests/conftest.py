import pytest


@pytest.fixture
def council_conference(make_conference, secretary):
    """A published conference with a two-seat Security Council and a roomy GA."""
    return make_conference(
        creator=secretary,
        committees=[
            {"name": "Security Council", "capacity": 2, "countries": ["USA", "UK", "France"]},
            {"name": "General Assembly", "capacity": 10, "countries": ["Kazakhstan", "Japan"]},
        ],
    )


@pytest.fixture
def council(council_conference):
    return council_conference.committees.get(name="Security Council")


@pytest.fixture
def assembly(council_conference):
    return council_conference.committees.get(name="General Assembly")
