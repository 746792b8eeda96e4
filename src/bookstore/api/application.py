"""Bookstore FastAPI application factory.

The domain must be initialised (``bookstore.init()``) before ``create_app`` is
called. Route handlers are plain ``def`` functions, so FastAPI runs them in its
worker thread pool and a blocking database call holds up only its own request.

Middleware, outermost first: CORS, request context, access gate, domain
context.
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from protean.domain import Domain

from bookstore.api.access import AccessGate
from bookstore.api.errors import register_exception_handlers
from bookstore.catalogue.api import books_router
from bookstore.domain import bookstore
from bookstore.identity.api import admin_users_router, auth_router
from bookstore.identity.tokens import TokenService
from bookstore.ordering.api import admin_orders_router, cart_router, orders_router
from bookstore.utils.logging import add_context, clear_context, get_logger
from bookstore.utils.settings import custom_setting

logger = get_logger(__name__)


def _cors_origins(config) -> list[str]:
    origins = custom_setting("cors_origins", [], config=config)
    if isinstance(origins, str):
        origins = [origin.strip() for origin in origins.split(",")]
    return [origin for origin in origins if origin]


def create_app(domain: Domain = bookstore) -> FastAPI:
    tokens = TokenService.from_config(domain.config)

    app = FastAPI(
        title="Bookstore API",
        description="Online bookstore catalogue, cart and checkout",
    )
    app.state.domain = domain
    app.state.tokens = tokens

    register_exception_handlers(app)

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with domain.domain_context():
            response = await call_next(request)
        return response

    app.middleware("http")(AccessGate(tokens))

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request id to every log line emitted while serving the request."""
        request_id = request.headers.get("x-request-id") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.debug("request.served", status=response.status_code)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(domain.config),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(books_router)
    app.include_router(cart_router)
    app.include_router(orders_router)
    app.include_router(admin_users_router)
    app.include_router(admin_orders_router)

    @app.get("/health", tags=["service"])
    def health():
        return {"status": "ok", "domain": domain.name}

    return app
