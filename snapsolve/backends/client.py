"""VisionBackend - abstract base for the model transports."""
from abc import ABC, abstractmethod

from snapsolve.models import AnalysisRequest


class VisionBackend(ABC):
    name: str = "backend"

    @abstractmethod
    async def generate(
        self,
        request: AnalysisRequest,
        model: str,
        thinking_budget: int | None = None,
    ) -> str:
        """Send one request to ``model`` and return its raw text. Raises on failure.

        A ``thinking_budget`` of None leaves the reasoning parameter out of the
        request entirely.
        """
        ...
