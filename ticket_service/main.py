import logging
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from ticket_service.api.deps import get_persistent_ticket_store, get_ticket_store
from ticket_service.api.router import api_router
from ticket_service.core.config import Settings, settings as default_settings
from ticket_service.core.errors import DomainError, TicketNotFound
from ticket_service.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

def _run_migrations_if_needed(settings: Settings):
    """Apply Alembic migrations automatically in production if enabled.

    Only the persistent ticket store owns a schema. Controlled by
    AUTO_APPLY_MIGRATIONS (default: true). Safe to run repeatedly.
    """
    if settings.env.lower() != "prod" or settings.ticket_store != "persistent":
        return
    if not settings.auto_apply_migrations:
        return
    from alembic import command
    from alembic.config import Config
    alembic_ini = Path(__file__).resolve().parents[1] / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("alembic.ini not found at %s, skipping auto-migrations", alembic_ini)
        return
    cfg = Config(str(alembic_ini))
    # Ensure script_location resolves correctly when launched from arbitrary CWD
    script_location = Path(__file__).resolve().parents[1] / "alembic"
    if script_location.exists():
        cfg.set_main_option("script_location", str(script_location))
    logger.info("Applying Alembic migrations -> head ...")
    command.upgrade(cfg, "head")
    logger.info("Migrations applied successfully")

def _seed_demo_tickets_if_needed(settings: Settings):
    if not settings.is_development or settings.ticket_store != "persistent":
        return
    entries = settings.seed_tickets
    if not entries:
        return
    from ticket_service.db.init_db import seed_demo_tickets
    from ticket_service.db.session import SessionLocal
    db = SessionLocal()
    try:
        seed_demo_tickets(db, entries)
    finally:
        db.close()

async def domain_error_handler(request: Request, exc: DomainError):
    if isinstance(exc, TicketNotFound):
        body = "<h3>Ticket not found</h3>"
    else:
        body = f"<h3>{exc.code}</h3>"
    return HTMLResponse(body, status_code=exc.status)

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    # debug=True makes Starlette render a traceback page for unhandled errors
    app = FastAPI(title=settings.app_name, version="0.1.0", debug=settings.show_error_details)
    app.state.settings = settings
    app.add_exception_handler(DomainError, domain_error_handler)

    # The store variant is chosen once here, not per request.
    if settings.ticket_store == "persistent":
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL environment variable must be set when TICKET_STORE=persistent")
        app.dependency_overrides[get_ticket_store] = get_persistent_ticket_store
    logger.info(
        "Resolved ticket store: %s (diagnostic error pages: %s)",
        settings.ticket_store,
        "on" if settings.show_error_details else "off",
    )

    app.include_router(api_router)

    @app.on_event("startup")
    def startup():
        # Seed only AFTER migrations applied.
        _run_migrations_if_needed(settings)
        _seed_demo_tickets_if_needed(settings)

    return app

app = create_app()
