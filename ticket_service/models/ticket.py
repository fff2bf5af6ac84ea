from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ticket_service.models.base import Base

class Ticket(Base):
    __tablename__ = "tickets"

    # Ids are caller supplied, never generated by the database
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    bar_code: Mapped[str] = mapped_column("barCode", String, nullable=False)
