"""
HTTP application factory.

Wires routes, middlewares and the database session factory.
"""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from heaven_club.web import claim_handlers, health, member_handlers, network_handlers
from heaven_club.web.keys import SESSION_MAKER_KEY
from heaven_club.web.middlewares import error_middleware, session_middleware


def setup_routes(app: web.Application) -> None:
    """Register all routes."""
    # Network views
    app.router.add_get("/network/leaders", network_handlers.leaders_handler)
    app.router.add_get("/network/graph", network_handlers.graph_handler)
    app.router.add_get(
        r"/network/members/{member_id:\d+}",
        network_handlers.member_network_handler,
    )

    # Reward claims
    app.router.add_post("/network/claims", claim_handlers.create_claim_handler)
    app.router.add_get("/network/claims", claim_handlers.member_claims_handler)
    app.router.add_get("/admin/claims", claim_handlers.admin_claims_handler)
    app.router.add_put(
        r"/admin/claims/{claim_id:\d+}", claim_handlers.update_claim_handler
    )

    # Membership
    app.router.add_post(
        "/referral/validate", member_handlers.validate_referral_handler
    )
    app.router.add_post("/members", member_handlers.register_member_handler)
    app.router.add_post(
        r"/members/{member_id:\d+}/club", member_handlers.join_club_handler
    )

    # Probes
    app.router.add_get("/health", health.health_handler)
    app.router.add_get("/readiness", health.readiness_handler)
    app.router.add_get("/liveness", health.liveness_handler)


def create_app(
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> web.Application:
    """
    Create the HTTP application.

    Args:
        session_maker: Session factory, defaults to the configured database

    Returns:
        Configured aiohttp application
    """
    if session_maker is None:
        from heaven_club.config.database import async_session_maker

        session_maker = async_session_maker

    app = web.Application(middlewares=[error_middleware, session_middleware])
    app[SESSION_MAKER_KEY] = session_maker
    setup_routes(app)
    return app
