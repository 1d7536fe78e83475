"""
Seat label generation for a pricing zone.

Seats are abstract sequence numbers per zone: a label is the zone's initials
followed by a running index, e.g. "Zone A" -> "ZA1", "ZA2", ...
"""

from typing import Iterable, List

from ticketing.exceptions import SeatAllocationError, ValidationError


def seat_prefix(zone_name: str) -> str:
    """
    Initials of each whitespace-separated word of the zone name, uppercased.

    Args:
        zone_name: Zone name, e.g. "North Upper Tier"

    Returns:
        str: The seat-label prefix, e.g. "NUT"
    """
    return "".join(word[0] for word in zone_name.split()).upper()


def prior_max_seat_index(seat_labels: Iterable[str], prefix: str) -> int:
    """
    Highest numeric suffix among the seat labels already handed out.

    Args:
        seat_labels: Seat labels of the SUCCESS orders of one zone+fixture
        prefix: Seat-label prefix of that zone

    Returns:
        int: The maximum index, 0 when there are no labels

    Raises:
        SeatAllocationError: If a label does not carry the prefix followed
            by a non-negative integer.
    """
    highest = 0
    for label in seat_labels:
        suffix = label[len(prefix):] if label.startswith(prefix) else ""
        if not suffix.isdigit():
            raise SeatAllocationError(label)
        highest = max(highest, int(suffix))
    return highest


def allocate_seats(zone_name: str, count: int, prior_max_seat_index: int = 0) -> List[str]:
    """
    Next block of seat labels for a zone.

    Args:
        zone_name: Name of the zone the seats belong to
        count: Number of seats requested (>= 1)
        prior_max_seat_index: Highest index already allocated (>= 0)

    Returns:
        List[str]: ``count`` labels continuing after ``prior_max_seat_index``
    """
    if count < 1:
        raise ValidationError("At least one seat must be allocated", field="count")
    if prior_max_seat_index < 0:
        raise ValidationError(
            "Prior seat index cannot be negative", field="prior_max_seat_index"
        )

    prefix = seat_prefix(zone_name)
    if not prefix:
        raise ValidationError("Zone name has no initials to prefix seats with", field="zone_name")
    return [f"{prefix}{prior_max_seat_index + i}" for i in range(1, count + 1)]
