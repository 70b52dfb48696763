# __init__.py
from app.schemas.auth import TokenPayload
from app.schemas.company import CompanyRead
from app.schemas.job import (
	JobCreate,
	JobDeleteResponse,
	JobDetail,
	JobDetailResponse,
	JobListResponse,
	JobRead,
	JobResponse,
	JobSearch,
	JobSummary,
	JobUpdate,
)

__all__ = [
	"TokenPayload",
	"CompanyRead",
	"JobCreate",
	"JobDeleteResponse",
	"JobDetail",
	"JobDetailResponse",
	"JobListResponse",
	"JobRead",
	"JobResponse",
	"JobSearch",
	"JobSummary",
	"JobUpdate",
]
