"""
Error taxonomy shared by the core operations.

Every core operation fails fast with one of these before anything is
committed. The HTTP layer maps them to status codes in ``ticketing.main``.
"""

from typing import Optional


class TicketingError(Exception):
    """Base class for errors raised by the ticketing core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TicketingError):
    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(TicketingError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConflictError(TicketingError):
    pass


class FixtureConflictError(ConflictError):
    """The proposed fixture overlaps an active fixture of the same stadium or team."""

    MESSAGES = {
        "stadium": "Stadium has another fixture on the same date and time",
        "team_one": "Team One has another fixture on the same date and time",
        "team_two": "Team Two has another fixture on the same date and time",
    }

    def __init__(self, resource: str):
        super().__init__(self.MESSAGES.get(resource, "Fixture conflict"))
        self.resource = resource


class CapacityExceededError(ConflictError):
    def __init__(self, zone_id: int, requested: int, available: int):
        super().__init__(
            f"Zone {zone_id} has {available} seats left, {requested} requested"
        )
        self.zone_id = zone_id
        self.requested = requested
        self.available = available


class SeatAllocationError(TicketingError):
    """A historical seat label cannot be parsed, so no new seats are handed out."""

    def __init__(self, seat_no: str):
        super().__init__(f"Invalid seat label on record: {seat_no!r}")
        self.seat_no = seat_no


class TransactionFailure(TicketingError):
    pass


class AuthenticationError(TicketingError):
    pass
