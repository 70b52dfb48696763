# dependencies.py
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from app.db.sql import Database
from app.schemas.auth import TokenPayload
from app.services.job_service import JobService
from app.utils.jwt_handler import decode_access_token


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_job_service(db: Database = Depends(get_database)) -> JobService:
    return JobService(db)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenPayload | None:
    """Decode the bearer token if one was sent; anonymous requests yield None."""
    if credentials is None:
        return None
    payload = decode_access_token(credentials.credentials)
    try:
        return TokenPayload.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload") from exc


def require_admin(current_user: TokenPayload | None = Depends(get_current_user)) -> TokenPayload:
    if current_user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    if not current_user.is_admin:
        logger.info("auth.require_admin denied sub=%s", current_user.sub)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin access required")
    return current_user
