# applications/assignment.py
"""
Committee / country auto-assignment.

Pure computation: given a conference's approved applications (most recent
first) and its committees, work out where every applicant sits. Nothing here
touches the database; ``services.run_auto_assignment`` reads the inputs and
writes back whatever changed.

Order of work:

1. Applicants already seated in one of the committees keep their seat, in
   fetch order, while the committee has room. Lowering a capacity releases
   the overflow.
2. Everyone else gets their primary committee if it has room, then (in a
   second sweep) their secondary, then (third sweep) their tertiary.
   Whoever is left stays unplaced.
3. Countries: a seated applicant keeps a previous country that is still on
   the committee's list and not already taken there. The rest get a random
   free country from the list, or none when the list is empty or used up.

Running the same input twice yields the same placements.
"""
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

PREFERENCE_PASSES = ("primary", "secondary", "tertiary")


@dataclass(frozen=True)
class Assignment:
    application_id: int
    committee_id: Optional[int]
    country: Optional[str]
    previous_committee_id: Optional[int]
    previous_country: Optional[str]

    @property
    def changed(self) -> bool:
        return (self.committee_id, self.country) != (
            self.previous_committee_id,
            self.previous_country,
        )

    @property
    def newly_placed(self) -> bool:
        return self.committee_id is not None and (
            self.committee_id != self.previous_committee_id
        )


@dataclass
class AssignmentResult:
    assignments: List[Assignment] = field(default_factory=list)

    @property
    def placed(self) -> int:
        return sum(1 for a in self.assignments if a.committee_id is not None)

    @property
    def unplaced(self) -> int:
        return sum(1 for a in self.assignments if a.committee_id is None)

    @property
    def changes(self) -> List[Assignment]:
        return [a for a in self.assignments if a.changed]

    def for_application(self, application_id) -> Optional[Assignment]:
        for assignment in self.assignments:
            if assignment.application_id == application_id:
                return assignment
        return None


class _Seats:
    """Seat and country bookkeeping for one run."""

    def __init__(self, committees):
        self.committees = {c.pk: c for c in committees}
        self.taken: Dict[int, int] = {c.pk: 0 for c in committees}
        self.claimed: Dict[int, Set[str]] = {c.pk: set() for c in committees}

    def has_room(self, committee_id) -> bool:
        committee = self.committees.get(committee_id)
        return committee is not None and self.taken[committee_id] < committee.capacity

    def seat(self, committee_id):
        self.taken[committee_id] += 1

    def can_keep_country(self, committee_id, country) -> bool:
        if not country:
            return False
        committee = self.committees[committee_id]
        return country in (committee.countries or []) and country not in self.claimed[committee_id]

    def claim(self, committee_id, country):
        self.claimed[committee_id].add(country)

    def free_countries(self, committee_id) -> List[str]:
        committee = self.committees[committee_id]
        return [c for c in (committee.countries or []) if c not in self.claimed[committee_id]]


def _preference(application, pass_name):
    return getattr(application, f"{pass_name}_committee_id")


def compute_assignments(applications, committees, rng=random) -> AssignmentResult:
    """
    Work out placements for ``applications`` (approved only, in the order
    given) across ``committees``. ``rng`` needs a ``choice`` method.
    """
    committees = sorted(committees, key=lambda c: (c.priority, c.pk))
    seats = _Seats(committees)
    seated: Dict[int, int] = {}

    for application in applications:
        committee_id = application.assigned_committee_id
        if seats.has_room(committee_id):
            seats.seat(committee_id)
            seated[application.pk] = committee_id

    for pass_name in PREFERENCE_PASSES:
        for application in applications:
            if application.pk in seated:
                continue
            committee_id = _preference(application, pass_name)
            if seats.has_room(committee_id):
                seats.seat(committee_id)
                seated[application.pk] = committee_id

    # Kept countries are claimed before any random pick so a pick can never
    # take a country someone later in the list still holds.
    countries: Dict[int, Optional[str]] = {}
    for application in applications:
        committee_id = seated.get(application.pk)
        if committee_id is None:
            continue
        if seats.can_keep_country(committee_id, application.assigned_country):
            seats.claim(committee_id, application.assigned_country)
            countries[application.pk] = application.assigned_country

    for application in applications:
        committee_id = seated.get(application.pk)
        if committee_id is None or application.pk in countries:
            continue
        free = seats.free_countries(committee_id)
        if free:
            country = rng.choice(free)
            seats.claim(committee_id, country)
            countries[application.pk] = country
        else:
            countries[application.pk] = None

    result = AssignmentResult()
    for application in applications:
        result.assignments.append(
            Assignment(
                application_id=application.pk,
                committee_id=seated.get(application.pk),
                country=countries.get(application.pk),
                previous_committee_id=application.assigned_committee_id,
                previous_country=application.assigned_country or None,
            )
        )
    return result
