"""Ticket stores: the only place tickets are looked up or fabricated."""
import logging
import uuid
from typing import Protocol

from sqlalchemy.orm import Session

from ticket_service.core.errors import TicketNotFound
from ticket_service.models.ticket import Ticket
from ticket_service.schemas.ticket import TicketRecord

logger = logging.getLogger(__name__)

class TicketStore(Protocol):
    def find(self, ticket_id: int) -> TicketRecord: ...


class EphemeralTicketStore:
    """Fabricates a ticket with a fresh random bar code on every lookup."""

    def find(self, ticket_id: int) -> TicketRecord:
        bar_code = str(uuid.uuid4())
        logger.debug("Issued ephemeral ticket %s", ticket_id)
        return TicketRecord(id=ticket_id, bar_code=bar_code)


class PersistentTicketStore:
    """Reads tickets from the `tickets` table through a request scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def find(self, ticket_id: int) -> TicketRecord:
        row = self.db.get(Ticket, ticket_id)
        if row is None:
            logger.warning("Ticket %s not found", ticket_id)
            raise TicketNotFound(ticket_id)
        return TicketRecord(id=row.id, bar_code=row.bar_code)

    def add(self, ticket_id: int, bar_code: str) -> TicketRecord:
        row = Ticket(id=ticket_id, bar_code=bar_code)
        self.db.add(row)
        self.db.commit()
        return TicketRecord(id=row.id, bar_code=row.bar_code)
