"""API route handlers."""

from .advisor import router as advisor_router
from .matching import router as matching_router
