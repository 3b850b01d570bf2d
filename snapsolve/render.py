"""Plain-text rendering of a solution for chat delivery.

Markdown and LaTeX are passed through as source; the chat client is not
asked to interpret them.
"""
from snapsolve.constants import (
    LANG_EN,
    OPTION_LABELS,
    TELEGRAM_MAX_MESSAGE_LENGTH,
    UI_TEXT,
)
from snapsolve.models import AnalysisResult
from snapsolve.sessions import QuizState


def ui_text(language: str, key: str) -> str:
    return UI_TEXT.get(language, UI_TEXT[LANG_EN])[key]


def split_message(text: str, limit: int = TELEGRAM_MAX_MESSAGE_LENGTH) -> list[str]:
    """Split on line boundaries so each chunk fits in one chat message.

    A single line longer than ``limit`` is hard-wrapped.
    """
    chunks: list[str] = []
    current = ""
    for line in text.splitlines(keepends=True):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if len(current) + len(line) > limit:
            chunks.append(current)
            current = ""
        current += line
    if current.strip():
        chunks.append(current)
    return [c.strip("\n") for c in chunks if c.strip()]


def render_answer(result: AnalysisResult, language: str) -> str:
    return f"{ui_text(language, 'answer_title')}\n\n{result.answer}"


def render_explanation(result: AnalysisResult, language: str) -> list[str]:
    return split_message(f"{ui_text(language, 'explanation_title')}\n\n{result.explanation}")


def option_label(index: int) -> str:
    return OPTION_LABELS[index]


def render_quiz_feedback(state: QuizState, language: str) -> str:
    """Verdict and quiz explanation shown once an option has been picked."""
    quiz = state.quiz
    match state.is_correct:
        case True:
            lines = [ui_text(language, "correct")]
        case _:
            lines = [
                ui_text(language, "incorrect"),
                f"{option_label(quiz.correct_index)}. {quiz.correct_option}",
            ]
    lines += ["", ui_text(language, "explanation"), quiz.explanation, "", ui_text(language, "prompt_next")]
    return "\n".join(lines)


def render_quiz(state: QuizState, language: str) -> str:
    quiz = state.quiz
    lines = [ui_text(language, "quiz_title"), "", quiz.question, ""]
    lines += [f"{option_label(i)}. {option}" for i, option in enumerate(quiz.options)]
    match state.answered:
        case True:
            lines += ["", render_quiz_feedback(state, language)]
        case False:
            lines += ["", ui_text(language, "select_option")]
    return "\n".join(lines)


def render_quiz_chunks(state: QuizState, language: str) -> list[str]:
    return split_message(render_quiz(state, language))
