# main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Ensure repo-root .env is loaded for the running server process.
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import build_sqlalchemy_db_url, settings
from app.database import build_engine, create_tables
from app.db.sql import Database
from app.api.routes.health import router as health_router
from app.routers.jobs import router as jobs_router
from app.utils.validation import format_validation_errors


logger = logging.getLogger(__name__)


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": format_validation_errors(exc.errors())},
    )


def create_app(db_url: str | None = None) -> FastAPI:
    db_url = db_url or build_sqlalchemy_db_url(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(build_engine(db_url))
        # Avoid accidental DDL against shared databases; sqlite gets its tables created.
        if db_url.startswith("sqlite"):
            create_tables(database.engine)
        app.state.database = database
        yield
        database.dispose()
        logger.info("database engine disposed")

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(RequestValidationError, _validation_exception_handler)

    application.include_router(health_router)
    application.include_router(jobs_router)
    return application


app = create_app()
