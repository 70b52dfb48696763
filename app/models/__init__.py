# __init__.py
from app.models.company import Company
from app.models.job import Job

__all__ = [
	"Company",
	"Job",
]
