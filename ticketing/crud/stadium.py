from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
import logging

from ticketing.exceptions import NotFoundError, ValidationError
from ticketing.models.order import Ticket
from ticketing.models.stadium import Stadium, Zone
from ticketing.schemas.stadium import (
    StadiumCreate,
    StadiumUpdate,
    ZoneCreate,
    ZoneUpdate,
)

logger = logging.getLogger(__name__)


def get_stadium(db: Session, stadium_id: int) -> Optional[Stadium]:
    return db.query(Stadium).filter(Stadium.id == stadium_id).first()


def get_stadiums(db: Session) -> List[Stadium]:
    return db.query(Stadium).options(selectinload(Stadium.zones)).all()


def create_stadium(db: Session, stadium: StadiumCreate) -> Stadium:
    db_stadium = Stadium(name=stadium.name, abbr=stadium.abbr.lower())
    db.add(db_stadium)
    db.commit()
    db.refresh(db_stadium)
    return db_stadium


def update_stadium(db: Session, stadium_id: int, stadium: StadiumUpdate) -> Stadium:
    db_stadium = get_stadium(db, stadium_id)
    if not db_stadium:
        raise NotFoundError("Stadium", stadium_id)

    update_data = stadium.model_dump(exclude_unset=True)
    if "abbr" in update_data:
        update_data["abbr"] = update_data["abbr"].lower()
    for field, value in update_data.items():
        setattr(db_stadium, field, value)

    db.commit()
    db.refresh(db_stadium)
    return db_stadium


def get_zone(db: Session, zone_id: int) -> Optional[Zone]:
    return db.query(Zone).filter(Zone.id == zone_id).first()


def get_zones(db: Session, stadium_id: Optional[int] = None) -> List[Zone]:
    query = db.query(Zone)
    if stadium_id:
        query = query.filter(Zone.stadium_id == stadium_id)
    return query.order_by(Zone.id).all()


def create_zone(db: Session, zone: ZoneCreate) -> Zone:
    if not get_stadium(db, zone.stadium_id):
        raise NotFoundError("Stadium", zone.stadium_id)

    db_zone = Zone(**zone.model_dump())
    db.add(db_zone)
    db.commit()
    db.refresh(db_zone)
    return db_zone


def update_zone(db: Session, zone_id: int, zone: ZoneUpdate) -> Zone:
    """
    Update a zone's name, price or size.

    The name cannot change while tickets are held in the zone: seat labels
    are prefixed with the name's initials and new seats continue the
    existing numbering.
    """
    db_zone = get_zone(db, zone_id)
    if not db_zone:
        raise NotFoundError("Zone", zone_id)

    update_data = zone.model_dump(exclude_unset=True)
    new_name = update_data.get("name")
    if new_name is not None and new_name != db_zone.name:
        held = db.query(Ticket).filter(Ticket.zone_id == zone_id).count()
        if held:
            raise ValidationError(
                "Zone cannot be renamed while it has tickets", field="name"
            )

    for field, value in update_data.items():
        setattr(db_zone, field, value)

    db.commit()
    db.refresh(db_zone)
    logger.info(f"Zone {zone_id} updated: {sorted(update_data)}")
    return db_zone
