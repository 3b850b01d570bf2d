"""Rendering tests."""
from snapsolve.models import AnalysisResult, Quiz
from snapsolve.render import (
    render_answer,
    render_explanation,
    render_quiz,
    render_quiz_chunks,
    render_quiz_feedback,
    split_message,
)
from snapsolve.sessions import QuizState


def make_result(explanation: str = "Step 1.\nStep 2.") -> AnalysisResult:
    return AnalysisResult(
        answer="x = 5",
        explanation=explanation,
        quiz=Quiz(
            question="What is 2 + 2?",
            options=("3", "4", "5", "6"),
            correct_index=1,
            explanation="Add the numbers.",
        ),
    )


def test_split_message_keeps_short_text_whole():
    assert split_message("hello\nworld", limit=50) == ["hello\nworld"]


def test_split_message_breaks_on_lines():
    chunks = split_message("aaaa\nbbbb\ncccc", limit=10)

    assert chunks == ["aaaa\nbbbb", "cccc"]
    assert all(len(c) <= 10 for c in chunks)


def test_split_message_hard_wraps_long_lines():
    chunks = split_message("x" * 25, limit=10)

    assert chunks == ["x" * 10, "x" * 10, "x" * 5]


def test_render_answer_has_localized_title():
    assert render_answer(make_result(), "en").startswith("💡 The Answer")
    assert render_answer(make_result(), "zh").startswith("💡 最终答案")


def test_render_explanation_passes_latex_through():
    chunks = render_explanation(make_result("$\\frac{1}{2}$"), "en")

    assert "$\\frac{1}{2}$" in chunks[0]


def test_render_explanation_splits_long_text():
    chunks = render_explanation(make_result("line\n" * 2000), "en")

    assert len(chunks) > 1
    assert all(len(c) <= 4096 for c in chunks)


def test_render_quiz_unanswered_lists_options():
    text = render_quiz(QuizState(quiz=make_result().quiz), "en")

    assert "A. 3" in text
    assert "D. 6" in text
    assert "Select an option:" in text
    assert "Add the numbers." not in text


def test_render_quiz_correct_pick():
    state = QuizState(quiz=make_result().quiz)
    state.select(1)

    text = render_quiz(state, "en")

    assert "Correct!" in text
    assert "Add the numbers." in text


def test_render_quiz_wrong_pick_reveals_answer():
    state = QuizState(quiz=make_result().quiz)
    state.select(0)

    text = render_quiz(state, "zh")

    assert "不太对哦。正确答案是：" in text
    assert "B. 4" in text
    assert "解析：" in text


def test_quiz_feedback_holds_verdict_without_options():
    state = QuizState(quiz=make_result().quiz)
    state.select(1)

    text = render_quiz_feedback(state, "en")

    assert text.startswith("Correct!")
    assert "A. 3" not in text
    assert "Add the numbers." in text


def test_long_quiz_is_split_not_truncated():
    quiz = Quiz(
        question="Q" * 3000,
        options=("3", "4", "5", "6"),
        correct_index=1,
        explanation="E" * 3000,
    )
    state = QuizState(quiz=quiz)
    state.select(0)

    chunks = render_quiz_chunks(state, "en")

    assert len(chunks) > 1
    assert all(len(c) <= 4096 for c in chunks)
    joined = "\n".join(chunks)
    assert "D. 6" in joined
    assert "E" * 3000 in joined
