"""Turns raw provider text into a validated AnalysisResult."""
import json
import logging
import re
from typing import Any

from snapsolve.constants import DEFAULT_ANSWER, LANG_EN, QUIZ_OPTION_COUNT
from snapsolve.errors import ParseError, SchemaError
from snapsolve.models import AnalysisResult, Language, Quiz

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[\w-]*[ \t]*\r?\n?")
_CLOSING_FENCE = re.compile(r"\r?\n?```$")


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence the model may have wrapped around its JSON."""
    stripped = text.strip()
    match stripped.startswith("```"):
        case True:
            stripped = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", stripped, count=1), count=1)
            return stripped.strip()
        case False:
            return stripped


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _require_text(data: dict, key: str, where: str) -> str:
    match data.get(key):
        case str() as value if value.strip():
            return value
        case None:
            raise SchemaError(f"{where} is missing '{key}'")
        case _:
            raise SchemaError(f"{where} field '{key}' must be a non-empty string")


def _parse_options(raw: Any) -> tuple[str, ...]:
    match raw:
        case list() if len(raw) == QUIZ_OPTION_COUNT and all(map(_non_empty_str, raw)):
            return tuple(raw)
        case list():
            raise SchemaError(f"quiz.options must hold exactly {QUIZ_OPTION_COUNT} non-empty strings")
        case _:
            raise SchemaError("quiz.options must be a list")


def _parse_correct_index(raw: Any, option_count: int) -> int:
    match raw:
        case bool():
            raise SchemaError("quiz.correctIndex must be an integer")
        case int() as index if 0 <= index < option_count:
            return index
        case int():
            raise SchemaError(f"quiz.correctIndex {raw} is outside [0, {option_count - 1}]")
        case _:
            raise SchemaError("quiz.correctIndex must be an integer")


def _parse_quiz(raw: Any) -> Quiz:
    match raw:
        case dict():
            pass
        case _:
            raise SchemaError("quiz must be an object")
    options = _parse_options(raw.get("options"))
    return Quiz(
        question=_require_text(raw, "question", "quiz"),
        options=options,
        correct_index=_parse_correct_index(raw.get("correctIndex"), len(options)),
        explanation=_require_text(raw, "explanation", "quiz"),
    )


def _parse_answer(raw: Any, language: Language) -> str:
    match raw:
        case None:
            return DEFAULT_ANSWER.get(language, DEFAULT_ANSWER[LANG_EN])
        case str() as text if not text.strip():
            return DEFAULT_ANSWER.get(language, DEFAULT_ANSWER[LANG_EN])
        case str() as text:
            return text
        case other:
            return str(other)


def parse_result(text: str, language: Language) -> AnalysisResult:
    """Validate raw model output.

    Raises ParseError when the text is not a JSON object and SchemaError when
    a required field is missing or malformed. A missing ``answer`` is filled
    with a localized placeholder rather than rejected.
    """
    body = strip_code_fences(text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        logger.debug("Raw model text: %s", text)
        raise ParseError(f"Model returned invalid JSON: {exc}") from exc

    match data:
        case dict():
            pass
        case _:
            logger.debug("Raw model text: %s", text)
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    match data.get("quiz"):
        case None:
            raise SchemaError("response is missing 'quiz'")
        case _:
            pass

    return AnalysisResult(
        answer=_parse_answer(data.get("answer"), language),
        explanation=_require_text(data, "explanation", "response"),
        quiz=_parse_quiz(data["quiz"]),
    )
