"""Error taxonomy for a solve request and the classifier that maps raw
transport failures onto it.

Every error knows how to describe itself to the student in either supported
language via ``user_message``. ``fallback_eligible`` marks the classes that
justify one retry against the fallback model.
"""
import httpx
import openai
from google.genai import errors as genai_errors

from snapsolve.constants import (
    AUTH_ERROR_MARKERS,
    LANG_EN,
    MSG_ERR_AUTH,
    MSG_ERR_AUTH_PROXY_KEY,
    MSG_ERR_CONFIG,
    MSG_ERR_NETWORK,
    MSG_ERR_NOT_FOUND,
    MSG_ERR_PARSE,
    MSG_ERR_QUOTA,
    MSG_ERR_UNAVAILABLE,
    MSG_ERR_UNKNOWN,
    NETWORK_ERROR_MARKERS,
    NOT_FOUND_ERROR_MARKERS,
    QUOTA_ERROR_MARKERS,
    UNAVAILABLE_ERROR_MARKERS,
)


class SolveError(Exception):
    kind = "unknown"
    fallback_eligible = False
    messages: dict[str, str] = MSG_ERR_UNKNOWN

    def user_message(self, language: str) -> str:
        return self.messages.get(language, self.messages[LANG_EN])


class ConfigError(SolveError, ValueError):
    kind = "config"
    messages = MSG_ERR_CONFIG


class AuthError(SolveError):
    kind = "auth"
    messages = MSG_ERR_AUTH

    def __init__(self, message: str = "", *, proxy_key_hint: bool = False) -> None:
        super().__init__(message)
        self.proxy_key_hint = proxy_key_hint

    def user_message(self, language: str) -> str:
        match self.proxy_key_hint:
            case True:
                return MSG_ERR_AUTH_PROXY_KEY.get(language, MSG_ERR_AUTH_PROXY_KEY[LANG_EN])
            case False:
                return super().user_message(language)


class QuotaError(SolveError):
    kind = "quota"
    messages = MSG_ERR_QUOTA


class NotFoundError(SolveError):
    kind = "not_found"
    fallback_eligible = True
    messages = MSG_ERR_NOT_FOUND


class ServiceUnavailableError(SolveError):
    kind = "unavailable"
    fallback_eligible = True
    messages = MSG_ERR_UNAVAILABLE


class NetworkError(SolveError):
    kind = "network"
    messages = MSG_ERR_NETWORK


class ParseError(SolveError):
    kind = "parse"
    messages = MSG_ERR_PARSE


class SchemaError(ParseError):
    kind = "schema"


class UnknownError(SolveError):
    """Anything we could not classify; shown to the student verbatim."""

    def user_message(self, language: str) -> str:
        return str(self) or super().user_message(language)


def _status_code(exc: BaseException) -> int | None:
    match exc:
        case openai.APIStatusError(status_code=int() as code):
            return code
        case genai_errors.APIError(code=int() as code):
            return code
        case httpx.HTTPStatusError(response=response):
            return response.status_code
        case _:
            return None


def _from_status(code: int, message: str) -> SolveError | None:
    match code:
        case 401 | 403:
            return AuthError(message)
        case 404:
            return NotFoundError(message)
        case 429:
            return QuotaError(message)
        case c if 500 <= c < 600:
            return ServiceUnavailableError(message)
        case _:
            return None


def _mentions(text: str, markers: tuple[str, ...]) -> bool:
    return any(m in text for m in markers)


def _from_message(message: str) -> SolveError:
    lowered = message.lower()
    match lowered:
        case t if _mentions(t, AUTH_ERROR_MARKERS):
            return AuthError(message)
        case t if _mentions(t, QUOTA_ERROR_MARKERS):
            return QuotaError(message)
        case t if _mentions(t, NOT_FOUND_ERROR_MARKERS):
            return NotFoundError(message)
        case t if _mentions(t, UNAVAILABLE_ERROR_MARKERS):
            return ServiceUnavailableError(message)
        case t if _mentions(t, NETWORK_ERROR_MARKERS):
            return NetworkError(message)
        case _:
            return UnknownError(message)


def classify_error(exc: BaseException) -> SolveError:
    """Map a transport exception onto the solve error taxonomy.

    Structured status codes win. Lower-cased substring matching is only
    consulted for errors without a status code, or whose code (such as a
    400 wrapping "API key not valid") says nothing on its own.
    """
    message = str(exc) or type(exc).__name__
    match exc:
        case SolveError():
            return exc
        case openai.APIConnectionError() | httpx.TransportError() | ConnectionError() | TimeoutError():
            return NetworkError(message)
        case _:
            pass

    match _status_code(exc):
        case int() as code:
            classified = _from_status(code, message)
            return classified if classified is not None else _from_message(message)
        case None:
            return _from_message(message)
