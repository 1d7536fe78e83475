"""
Detection of overlapping fixtures.

A stadium hosts one match at a time and a team plays one match at a time.
Two time ranges [s1, e1) and [s2, e2) overlap when s1 < e2 and s2 < e1,
which covers a candidate starting inside, ending inside, containing or
being contained by an existing fixture. Ranges that only touch do not
overlap.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from ticketing.models.fixture import FixtureStatus


@dataclass(frozen=True)
class FixtureCandidate:
    stadium_id: int
    team_one_id: int
    team_two_id: int
    date: date
    start: datetime
    end: datetime

    def __post_init__(self):
        object.__setattr__(self, "start", to_naive_utc(self.start))
        object.__setattr__(self, "end", to_naive_utc(self.end))


def to_naive_utc(value: datetime) -> datetime:
    """Time slots are stored as naive UTC; drop the offset after converting."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def ranges_overlap(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime
) -> bool:
    return start_a < end_b and start_b < end_a


def find_conflict(
    candidate: FixtureCandidate,
    existing: Iterable,
    exclude_fixture_id: Optional[int] = None,
) -> Optional[str]:
    """
    Which resource of the candidate clashes with an active fixture.

    Only fixtures that are not cancelled, are on the same calendar day and
    are not ``exclude_fixture_id`` (the fixture being edited) are compared.

    Args:
        candidate: The proposed stadium, teams and time slot
        existing: Fixtures with ``time_slot`` loaded
        exclude_fixture_id: Fixture to ignore

    Returns:
        Optional[str]: "stadium", "team_one" or "team_two", or None
    """
    overlapping = []
    for fixture in existing:
        slot = fixture.time_slot
        if fixture.status == FixtureStatus.CANCELLED or slot is None:
            continue
        if exclude_fixture_id is not None and fixture.id == exclude_fixture_id:
            continue
        if slot.date != candidate.date:
            continue
        if ranges_overlap(candidate.start, candidate.end, slot.start, slot.end):
            overlapping.append(fixture)

    if any(f.stadium_id == candidate.stadium_id for f in overlapping):
        return "stadium"
    for resource, team_id in (
        ("team_one", candidate.team_one_id),
        ("team_two", candidate.team_two_id),
    ):
        if any(team_id in (f.team_one_id, f.team_two_id) for f in overlapping):
            return resource
    return None


def has_conflict(
    candidate: FixtureCandidate,
    existing: Iterable,
    exclude_fixture_id: Optional[int] = None,
) -> bool:
    return find_conflict(candidate, existing, exclude_fixture_id) is not None
