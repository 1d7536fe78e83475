from ticketing.models.user import Admin, Audience
from ticketing.models.team import Team
from ticketing.models.stadium import Stadium, Zone
from ticketing.models.fixture import Fixture, FixtureStatus, TimeSlot
from ticketing.models.order import Order, OrderStatus, Ticket
from ticketing.models.payment import Payment, PaymentMethod, PaymentStatus

# Importing the package registers every model with Base.metadata
