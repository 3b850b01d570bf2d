"""Per-chat display state and in-flight request bookkeeping."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

from snapsolve.constants import MSG_SUPERSEDED
from snapsolve.models import AnalysisResult, Quiz

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SupersededError(Exception):
    """A newer request for the same chat replaced this one."""


@dataclass
class QuizState:
    quiz: Quiz
    selected_option: Optional[int] = None
    is_correct: Optional[bool] = None

    @property
    def answered(self) -> bool:
        return self.selected_option is not None

    def select(self, index: int) -> bool:
        """Record the student's pick. Only the first pick counts."""
        match index:
            case i if not 0 <= i < len(self.quiz.options):
                raise ValueError(f"option index {index} out of range")
            case _ if self.answered:
                return False
            case i:
                self.selected_option = i
                self.is_correct = self.quiz.is_correct(i)
                return True


@dataclass
class ChatSession:
    language: str
    result: Optional[AnalysisResult] = None
    quiz: Optional[QuizState] = None
    generation: int = 0


class SessionStore:

    def __init__(self, default_language: str) -> None:
        self._default_language = default_language
        self._sessions: dict[str, ChatSession] = {}

    def get(self, chat_id: str) -> ChatSession:
        return self._sessions.setdefault(chat_id, ChatSession(language=self._default_language))

    def set_language(self, chat_id: str, language: str) -> None:
        self.get(chat_id).language = language

    def show(self, chat_id: str, result: AnalysisResult) -> ChatSession:
        """Replace the displayed result wholesale and reset the quiz."""
        session = self.get(chat_id)
        session.result = result
        session.quiz = QuizState(quiz=result.quiz)
        session.generation += 1
        return session

    def quiz_for(self, chat_id: str, generation: int) -> Optional[QuizState]:
        """The live quiz, or None when the tap belongs to an older result."""
        session = self.get(chat_id)
        match (session.quiz, session.generation == generation):
            case (QuizState() as state, True):
                return state
            case _:
                return None


class InFlightRequests:
    """At most one solve per chat; a newer request cancels the older one."""

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}

    def pending(self, chat_id: str) -> bool:
        task = self._tasks.get(chat_id)
        return task is not None and not task.done()

    def submit(self, chat_id: str, work: Awaitable[T]) -> "asyncio.Future[T]":
        """Claim the chat's slot for ``work`` and cancel whatever held it.

        Runs without yielding to the event loop, so the request that calls
        it last is the one that survives.
        """
        match self._tasks.get(chat_id):
            case asyncio.Future() as previous if not previous.done():
                previous.cancel()
                logger.info(MSG_SUPERSEDED, chat_id)
            case _:
                pass

        task = asyncio.ensure_future(work)
        self._tasks[chat_id] = task
        return task

    async def wait(self, chat_id: str, task: "asyncio.Future[T]") -> T:
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            match current is not None and current.cancelling() == 0:
                case True:
                    raise SupersededError(chat_id) from None
                case False:
                    raise
        finally:
            match self._tasks.get(chat_id) is task:
                case True:
                    del self._tasks[chat_id]
                case False:
                    pass

    async def run(self, chat_id: str, work: Awaitable[T]) -> T:
        return await self.wait(chat_id, self.submit(chat_id, work))
