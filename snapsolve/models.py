from dataclasses import dataclass
from typing import Literal

from snapsolve.constants import IMAGE_MIME_TYPE, LANG_EN, SUPPORTED_LANGUAGES

Language = Literal["en", "zh"]


def normalize_language(tag: str | None, default: str = LANG_EN) -> str:
    """Map a loose language tag ('zh-CN', 'EN', None) onto a supported one."""
    match (tag or "").strip().lower()[:2]:
        case lang if lang in SUPPORTED_LANGUAGES:
            return lang
        case _:
            return default


@dataclass(frozen=True)
class AnalysisRequest:
    image_data: str
    language: Language
    system_instruction: str
    user_prompt: str
    mime_type: str = IMAGE_MIME_TYPE

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.image_data}"


@dataclass(frozen=True)
class Quiz:
    question: str
    options: tuple[str, ...]
    correct_index: int
    explanation: str

    def is_correct(self, index: int) -> bool:
        return index == self.correct_index

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]


@dataclass(frozen=True)
class AnalysisResult:
    answer: str
    explanation: str
    quiz: Quiz
