from typing import Iterator
from fastapi import Depends
from sqlalchemy.orm import Session

from ticket_service.db.session import get_db
from ticket_service.services.ticket_store import EphemeralTicketStore, PersistentTicketStore, TicketStore

def get_ticket_store() -> Iterator[TicketStore]:
    """Default store dependency; replaced at startup when TICKET_STORE=persistent."""
    yield EphemeralTicketStore()

def get_persistent_ticket_store(db: Session = Depends(get_db)) -> Iterator[TicketStore]:
    yield PersistentTicketStore(db)
