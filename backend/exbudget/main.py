from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import inspect
from exbudget.core.config import settings
from exbudget.core.logging import configure_logging, logger
from exbudget.api.router import api_router
from exbudget.db.session import engine
from exbudget.db.base import Base
import exbudget.db.models  # noqa: F401
from exbudget.services.seed import seed_demo


def prepare_dev_database(bind=None) -> None:
    # outside dev the schema comes from alembic
    if settings.ENV != "dev":
        return
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    if settings.SEED_DEMO:
        seed_demo()
    logger.info("dev_database_ready", tables=len(inspect(bind).get_table_names()), seeded=settings.SEED_DEMO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    prepare_dev_database()
    logger.info("app_ready", env=settings.ENV, routes=len(app.routes))
    yield
    logger.info("app_stopped", env=settings.ENV)


def create_app() -> FastAPI:
    configure_logging(settings.ENV)
    app = FastAPI(title="Exercise Budget Tracker", version="0.1.0", lifespan=lifespan)

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    app.include_router(api_router)
    return app

app = create_app()
