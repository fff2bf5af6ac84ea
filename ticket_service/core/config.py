from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Literal, Optional, Tuple
from pathlib import Path

class Settings(BaseSettings):
    app_name: str = Field(default="TicketService", alias="APP_NAME")
    env: str = Field(default="dev", alias="ENV")
    ticket_store: Literal["ephemeral", "persistent"] = Field(default="ephemeral", alias="TICKET_STORE")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    auto_apply_migrations: bool = Field(default=True, alias="AUTO_APPLY_MIGRATIONS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Raw env value (string), parsed via property to avoid JSON decoding errors
    seed_tickets_raw: Optional[str] = Field(default=None, alias="SEED_TICKETS", description="Comma separated or JSON list of id:barCode pairs")

    class Config:
        # Load env from the repository root regardless of CWD
        env_file = str(Path(__file__).resolve().parents[2] / ".env")
        case_sensitive = False

    def _parse_list(self, v: Optional[str]) -> List[str]:
        if v is None:
            return []
        s = v.strip()
        if not s:
            return []
        if s.startswith("[") and s.endswith("]"):
            try:
                import json
                loaded = json.loads(s)
                if isinstance(loaded, list):
                    return [str(e).strip() for e in loaded if str(e).strip()]
            except ValueError:
                pass
        return [e.strip() for e in s.split(",") if e.strip()]

    @property
    def is_development(self) -> bool:
        return self.env.lower() in {"dev", "development"}

    @property
    def show_error_details(self) -> bool:
        """Render diagnostic traceback pages instead of a generic 500."""
        return self.is_development

    @property
    def seed_tickets(self) -> List[Tuple[int, str]]:
        pairs = []
        for item in self._parse_list(self.seed_tickets_raw):
            ticket_id, sep, bar_code = item.partition(":")
            if not sep or not bar_code.strip():
                raise ValueError(f"SEED_TICKETS entry '{item}' must look like id:barCode")
            pairs.append((int(ticket_id), bar_code.strip()))
        return pairs

settings = Settings()  # type: ignore
