from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CompanyRead(BaseModel):
    handle: str
    name: str
    description: str | None = None
    num_employees: int | None = None
    logo_url: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
