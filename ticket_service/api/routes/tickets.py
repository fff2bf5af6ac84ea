import html
import re
import socket
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRoute
from starlette.routing import Match

from ticket_service.api.deps import get_ticket_store
from ticket_service.services.ticket_store import TicketStore


class AnyMethodRoute(APIRoute):
    """APIRoute that serves every HTTP method, including non-standard ones.

    `methods` still lists the common verbs so they show up in the OpenAPI
    schema; matching and dispatch ignore it.
    """

    def matches(self, scope):
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            return Match.FULL, child_scope
        return match, child_scope

    async def handle(self, scope, receive, send):
        await self.app(scope, receive, send)


router = APIRouter(route_class=AnyMethodRoute)

SENTINEL_TICKET_ID = -1
_INT32_MIN, _INT32_MAX = -2**31, 2**31 - 1
# ASCII whitespace and sign only; no underscores, Unicode digits or spaces.
_TICKET_ID_RE = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+[ \t\n\v\f\r]*")

TICKET_TEMPLATE = (
    "<h3>Hi Visitor!</h3>"
    "Here is your ticket: <b>{bar_code}</b><br/>"
    "Brought to you by: <b>{hostname}</b><br/>"
)

def parse_ticket_id(raw: str | None) -> int:
    """Parse a 32-bit ticket id, falling back to the sentinel instead of failing."""
    if raw is None or not _TICKET_ID_RE.fullmatch(raw):
        return SENTINEL_TICKET_ID
    value = int(raw)
    if not _INT32_MIN <= value <= _INT32_MAX:
        return SENTINEL_TICKET_ID
    return value

def first_query_value(request: Request, name: str) -> str | None:
    values = request.query_params.getlist(name)
    return values[0] if values else None

def render_ticket(bar_code: str, hostname: str) -> str:
    return TICKET_TEMPLATE.format(
        bar_code=html.escape(bar_code, quote=False),
        hostname=html.escape(hostname, quote=False),
    )

@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
    response_class=HTMLResponse,
)
def show_ticket(
    path: str,
    request: Request,
    store: TicketStore = Depends(get_ticket_store),
):
    # A repeated ?id= uses its first occurrence; unparsable values use the sentinel.
    ticket = store.find(parse_ticket_id(first_query_value(request, "id")))
    # Not cached: reports whichever host served this request.
    hostname = socket.gethostname()
    return HTMLResponse(render_ticket(ticket.bar_code, hostname))
