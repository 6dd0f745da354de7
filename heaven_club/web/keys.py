"""
Typed keys for application and request state.
"""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

SESSION_MAKER_KEY = web.AppKey("session_maker", async_sessionmaker)

# Request-scoped session, set by session_middleware
SESSION_KEY = web.RequestKey("db_session", AsyncSession)


def get_session(request: web.Request) -> AsyncSession:
    """Database session of the current request."""
    return request[SESSION_KEY]
