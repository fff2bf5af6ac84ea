import logging
from typing import Iterable, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ticket_service.models import ticket  # noqa: F401
from ticket_service.models.base import Base
from ticket_service.models.ticket import Ticket

logger = logging.getLogger(__name__)

def create_tables(bind: Engine):
    Base.metadata.create_all(bind=bind)

def seed_demo_tickets(db: Session, entries: Iterable[Tuple[int, str]]) -> int:
    """Insert demo tickets that are not stored yet (idempotent).

    Existing rows keep their bar code. Returns the number of inserted rows.
    """
    created = 0
    for ticket_id, bar_code in entries:
        if db.get(Ticket, ticket_id) is not None:
            continue
        db.add(Ticket(id=ticket_id, bar_code=bar_code))
        created += 1
    db.commit()
    if created:
        logger.info("Seeded %d demo ticket(s)", created)
    return created
