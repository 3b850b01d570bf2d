from dataclasses import dataclass
from typing import Optional
import hmac
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: Optional[str] = None


class AccessGate:
    """ACCESS_CODE gating: chats stay locked until they present the code once."""

    def __init__(self, access_code: Optional[str]):
        self._access_code = access_code or None
        self._unlocked: set[str] = set()

    @property
    def is_open(self) -> bool:
        return self._access_code is None

    def should_process(self, chat_id: str) -> AccessDecision:
        match (self.is_open, chat_id in self._unlocked):
            case (True, _) | (_, True):
                return AccessDecision(allowed=True)
            case _:
                logger.debug(f"Locked: {chat_id}")
                return AccessDecision(allowed=False, reason=f"Locked chat: {chat_id}")

    def unlock(self, chat_id: str, code: str) -> bool:
        match self._access_code:
            case None:
                return True
            case expected if hmac.compare_digest(code.strip().encode(), expected.encode()):
                self._unlocked.add(chat_id)
                logger.info("Unlocked chat %s", chat_id)
                return True
            case _:
                logger.warning("Wrong access code from chat %s", chat_id)
                return False
