"""
Inertia Clock - API Layer

REST interface over the running ClockEngine.

Structure:
- routes/     : Endpoint handlers (clock, system)
- schemas/    : Pydantic request/response schemas
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
