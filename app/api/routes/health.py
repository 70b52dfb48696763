from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.db.sql import Database
from app.routers.dependencies import get_database


router = APIRouter(prefix="/health", tags=["health"])


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime


class DBHealthStatus(BaseModel):
    database: str
    db_url: str
    timestamp: datetime


@router.get("/", response_model=HealthStatus, summary="API heartbeat")
def health_check() -> HealthStatus:
    return HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))


@router.get("/db", response_model=DBHealthStatus, summary="DB connectivity check")
def db_health_check(db: Database = Depends(get_database)) -> DBHealthStatus:
    return DBHealthStatus(
        database="ok" if db.ping() else "error",
        db_url=db.engine.url.render_as_string(hide_password=True),
        timestamp=datetime.now(timezone.utc),
    )
