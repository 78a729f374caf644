"""HTTP layer of the URL shortener.

Routers, request/response schemas and the dependencies that resolve
services and the calling user.
"""

from app.api.routes import api_router

__all__ = ["api_router"]
