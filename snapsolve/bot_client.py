"""Abstract interfaces for transport-agnostic bot clients."""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from snapsolve.models import AnalysisResult

# on_photo signature: (image_bytes, language, mime_type) -> result
OnPhoto = Callable[[bytes, str, str], Awaitable[AnalysisResult]]


class ChatActionIndicator(ABC):
    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    async def __aenter__(self) -> "ChatActionIndicator":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


class BotClient(ABC):
    @abstractmethod
    def run(self, on_photo: OnPhoto) -> None: ...

    @abstractmethod
    async def send_message(self, to: str, text: str) -> bool: ...
