from fastapi import APIRouter

from ticket_service.api.routes import tickets

api_router = APIRouter()
api_router.include_router(tickets.router, tags=["tickets"])  # ANY /{path}?id=
