from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import importlib.util
from ticket_service.core.config import settings

# DATABASE_URL is only required by the persistent ticket store; the ephemeral
# store never opens a session, so a missing URL leaves the engine unbound.
SQLALCHEMY_DATABASE_URL = settings.database_url

def _psycopg2_available() -> bool:
    return importlib.util.find_spec("psycopg2") is not None

def normalize_database_url(url: str) -> str:
    # A plain 'postgresql://' (or legacy 'postgres://') URL makes SQLAlchemy load
    # psycopg2. Only psycopg v3 is a dependency, so inject its driver when
    # psycopg2 is absent.
    if _psycopg2_available() or not url.startswith(("postgres://", "postgresql://")):
        return url
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url.replace("postgresql://", "postgresql+psycopg://", 1)

engine = create_engine(normalize_database_url(SQLALCHEMY_DATABASE_URL)) if SQLALCHEMY_DATABASE_URL else None
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    if engine is None:
        raise RuntimeError("DATABASE_URL environment variable must be set for the persistent ticket store")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
