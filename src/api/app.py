import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import register_error_handlers
from src.api.middleware import log_requests
from src.api.routes import bills, distributors, orders, payments, products, wallets

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config.ENABLE_SENTRY:
        import sentry_sdk

        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.AUTO_CREATE_TABLES:
            from src.depends import init_db

            await init_db()
            logger.info("Database tables ensured")
        yield

    app = FastAPI(
        title="MilkSync Settlement Service",
        description="Orders, bills and distributor wallets for dairy distribution",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if config.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    register_error_handlers(app, debug=config.DEBUG)

    for module in (orders, bills, wallets, payments, products, distributors):
        app.include_router(module.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
