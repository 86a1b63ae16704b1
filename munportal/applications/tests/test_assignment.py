"""Auto-assignment engine, exercised on plain objects without a database."""
import random
from types import SimpleNamespace

import pytest

from applications.assignment import compute_assignments


def committee(pk, capacity, countries=(), priority=1):
    return SimpleNamespace(pk=pk, capacity=capacity, countries=list(countries), priority=priority)


def application(pk, primary=None, secondary=None, tertiary=None, committee_id=None, country=None):
    return SimpleNamespace(
        pk=pk,
        primary_committee_id=primary,
        secondary_committee_id=secondary,
        tertiary_committee_id=tertiary,
        assigned_committee_id=committee_id,
        assigned_country=country,
    )


def apply_result(applications, result):
    """What the applications look like after the run is written back."""
    return [
        application(
            a.pk,
            a.primary_committee_id,
            a.secondary_committee_id,
            a.tertiary_committee_id,
            committee_id=result.for_application(a.pk).committee_id,
            country=result.for_application(a.pk).country,
        )
        for a in applications
    ]


def test_security_council_scenario():
    council = committee(1, capacity=2, countries=["USA", "UK", "France"])
    apps = [application(3, primary=1), application(2, primary=1), application(1, primary=1)]

    result = compute_assignments(apps, [council], rng=random.Random(7))

    first, second, third = (result.for_application(pk) for pk in (3, 2, 1))
    assert first.committee_id == 1 and second.committee_id == 1
    assert third.committee_id is None and third.country is None
    assert first.country in council.countries
    assert second.country in council.countries
    assert first.country != second.country
    assert (result.placed, result.unplaced) == (2, 1)

    rerun = compute_assignments(apply_result(apps, result), [council], rng=random.Random(99))
    assert rerun.changes == []


def test_preferences_are_tried_in_order():
    a, b, c = committee(1, 1), committee(2, 1), committee(3, 1)
    apps = [
        application(10, primary=1, secondary=2, tertiary=3),
        application(11, primary=1, secondary=2, tertiary=3),
        application(12, primary=1, secondary=2, tertiary=3),
        application(13, primary=1, secondary=2, tertiary=3),
    ]

    result = compute_assignments(apps, [a, b, c])

    assert [result.for_application(pk).committee_id for pk in (10, 11, 12, 13)] == [1, 2, 3, None]


def test_primary_pass_runs_for_everyone_before_secondaries():
    a, b = committee(1, 1), committee(2, 1)
    apps = [
        application(1, primary=1),
        application(2, primary=1, secondary=2),
        application(3, primary=2),
    ]

    result = compute_assignments(apps, [a, b])

    # the third applicant's primary beats the second applicant's fallback
    assert result.for_application(1).committee_id == 1
    assert result.for_application(3).committee_id == 2
    assert result.for_application(2).committee_id is None


def test_unknown_or_missing_committees_are_skipped():
    a = committee(1, 5)
    apps = [application(1, primary=99, secondary=None, tertiary=1), application(2)]

    result = compute_assignments(apps, [a])

    assert result.for_application(1).committee_id == 1
    assert result.for_application(2).committee_id is None


def test_no_country_list_means_no_country():
    result = compute_assignments([application(1, primary=1)], [committee(1, 3)])
    assert result.for_application(1).country is None
    assert result.for_application(1).committee_id == 1


def test_countries_run_out_before_seats():
    council = committee(1, capacity=3, countries=["USA"])
    apps = [application(1, primary=1), application(2, primary=1), application(3, primary=1)]

    result = compute_assignments(apps, [council])

    countries = [result.for_application(pk).country for pk in (1, 2, 3)]
    assert countries.count("USA") == 1
    assert countries.count(None) == 2
    assert result.placed == 3


def test_previous_placement_and_country_are_kept():
    council = committee(1, capacity=2, countries=["USA", "UK", "France"])
    apps = [
        application(5, primary=1),
        application(4, primary=1, committee_id=1, country="France"),
    ]

    result = compute_assignments(apps, [council], rng=random.Random(1))

    kept = result.for_application(4)
    assert (kept.committee_id, kept.country) == (1, "France")
    assert not kept.changed
    assert result.for_application(5).country in ("USA", "UK")


def test_later_kept_country_is_not_taken_by_a_random_pick():
    council = committee(1, capacity=2, countries=["USA", "UK"])
    apps = [
        application(2, primary=1),
        application(1, primary=1, committee_id=1, country="UK"),
    ]

    for seed in range(20):
        result = compute_assignments(apps, [council], rng=random.Random(seed))
        assert result.for_application(1).country == "UK"
        assert result.for_application(2).country == "USA"


def test_country_no_longer_on_the_list_is_replaced():
    council = committee(1, capacity=1, countries=["UK"])
    apps = [application(1, primary=1, committee_id=1, country="USSR")]

    result = compute_assignments(apps, [council])

    assert result.for_application(1).country == "UK"
    assert result.for_application(1).changed
    assert not result.for_application(1).newly_placed


def test_duplicate_previous_countries_only_one_keeps_it():
    council = committee(1, capacity=2, countries=["USA", "UK"])
    apps = [
        application(2, primary=1, committee_id=1, country="USA"),
        application(1, primary=1, committee_id=1, country="USA"),
    ]

    result = compute_assignments(apps, [council])

    assert result.for_application(2).country == "USA"
    assert result.for_application(1).country == "UK"


def test_lowered_capacity_releases_the_overflow():
    council = committee(1, capacity=1, countries=["USA", "UK"])
    apps = [
        application(2, primary=1, committee_id=1, country="USA"),
        application(1, primary=1, committee_id=1, country="UK"),
    ]

    result = compute_assignments(apps, [council])

    assert result.for_application(2).committee_id == 1
    released = result.for_application(1)
    assert (released.committee_id, released.country) == (None, None)
    assert released.changed


def test_existing_placements_are_seated_before_new_applicants():
    council = committee(1, capacity=1)
    apps = [application(2, primary=1), application(1, primary=1, committee_id=1)]

    result = compute_assignments(apps, [council])

    assert result.for_application(1).committee_id == 1
    assert result.for_application(2).committee_id is None


def test_newly_placed_flag():
    result = compute_assignments([application(1, primary=1)], [committee(1, 1)])
    assert result.for_application(1).newly_placed
    assert result.for_application(99) is None


@pytest.mark.parametrize("seed", range(10))
def test_random_inputs_respect_capacity_and_unique_countries(seed):
    rng = random.Random(seed)
    committees = [
        committee(pk, capacity=rng.randint(1, 4), countries=[f"C{pk}-{n}" for n in range(rng.randint(0, 5))], priority=rng.randint(1, 3))
        for pk in range(1, 5)
    ]
    apps = []
    for pk in range(30, 0, -1):
        prefs = rng.sample(range(1, 6), 3)
        apps.append(application(pk, *prefs))

    result = compute_assignments(apps, committees, rng=rng)

    for c in committees:
        seated = [a for a in result.assignments if a.committee_id == c.pk]
        assert len(seated) <= c.capacity
        countries = [a.country for a in seated if a.country is not None]
        assert len(countries) == len(set(countries))
        assert all(country in c.countries for country in countries)
    for a in result.assignments:
        if a.committee_id is None:
            assert a.country is None

    rerun = compute_assignments(apply_result(apps, result), committees, rng=random.Random(seed + 100))
    assert rerun.changes == []
