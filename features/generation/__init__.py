"""Package initialisation for asset generation feature."""

from .routes import router
from .service import GenerationJob, GenerationOutcome, GenerationService

__all__ = ["router", "GenerationJob", "GenerationOutcome", "GenerationService"]
