# auth.py
from pydantic import BaseModel


class TokenPayload(BaseModel):
    sub: str
    is_admin: bool = False
