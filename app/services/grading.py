"""Score a scenario submission: align answers with steps sorted by step_order."""
from collections.abc import Sequence
from typing import Any

from app.core.errors import InvalidInput, NotFound
from app.schemas.submission import GradingResultSchema, StepResultSchema

MAX_SCORE = 100


def normalize_answer(answer: Any) -> str:
    """Uppercased, stripped text of an answer; '' for None."""
    if answer is None:
        return ""
    return str(answer).strip().upper()


def percent_round_half_up(correct: int, total: int) -> int:
    """round(correct / total * 100) with .5 rounding up (builtin round() rounds half to even)."""
    return (correct * 2 * MAX_SCORE + total) // (2 * total)


def ensure_answer_list(answers: Any) -> None:
    if not isinstance(answers, (list, tuple)):
        raise InvalidInput("userAnswers must be an array.")


def grade_answers(steps: Sequence[Any], answers: Any) -> GradingResultSchema:
    """Grade answers positionally against steps ordered by step_order.

    Missing or empty answers count as wrong; answers past the last step are ignored.
    Raises InvalidInput if answers is not a list and NotFound if there are no steps.
    """
    ensure_answer_list(answers)
    if not steps:
        raise NotFound("No steps found for this scenario.")

    ordered = sorted(steps, key=lambda s: int(s.step_order))
    results = []
    for i, step in enumerate(ordered):
        picked = normalize_answer(answers[i]) if i < len(answers) else ""
        correct = normalize_answer(step.correct_action)
        results.append(StepResultSchema(
            step_id=getattr(step, "id", None),
            step_order=step.step_order,
            picked=picked or None,
            correct_action=correct,
            is_correct=bool(picked) and picked == correct,
            feedback=getattr(step, "feedback", None),
        ))

    total = len(results)
    correct_count = sum(1 for r in results if r.is_correct)
    return GradingResultSchema(
        score=percent_round_half_up(correct_count, total),
        all_correct=correct_count == total,
        correct_count=correct_count,
        total_steps=total,
        steps=results,
    )
