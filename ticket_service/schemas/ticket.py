from pydantic import BaseModel, ConfigDict, Field

class TicketRecord(BaseModel):
    """A ticket as handed out by a ticket store."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    bar_code: str = Field(alias="barCode", min_length=1)
