"""
Grading of one attempt against a quiz's answer key.

Both entry points are total: an answer whose question no longer exists, or
whose selection has the wrong type, simply earns nothing.
"""
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence


@dataclass(frozen=True)
class Answer:
    question_id: str
    selected_option: Any


@dataclass(frozen=True)
class GradedAnswer:
    question_id: str
    selected_option: Any
    correct_answer: Optional[int]
    is_correct: bool


def answers_from_json(raw: Optional[Iterable[Any]]) -> List[Answer]:
    """Rebuild answers from the list stored on a QuizResult row.

    Items that are not mappings cannot name a question, so they are dropped
    and earn nothing.
    """
    return [
        Answer(question_id=str(item.get("question_id")), selected_option=item.get("selected_option"))
        for item in raw or ()
        if isinstance(item, Mapping)
    ]


def answers_to_json(answers: Iterable[Answer]) -> List[dict]:
    return [{"question_id": a.question_id, "selected_option": a.selected_option} for a in answers]


def _answer_key(questions: Sequence) -> dict:
    return {q.id: q.correct_answer for q in questions}


def _matches(selected, correct) -> bool:
    # Exact match only; True must not count as option 1
    return type(selected) is type(correct) and selected == correct


def grade_answers(answers: Sequence[Answer], questions: Sequence) -> List[GradedAnswer]:
    key = _answer_key(questions)
    graded = []
    for answer in answers:
        correct = key.get(answer.question_id)
        graded.append(GradedAnswer(
            question_id=answer.question_id,
            selected_option=answer.selected_option,
            correct_answer=correct,
            is_correct=correct is not None and _matches(answer.selected_option, correct),
        ))
    return graded


def grade(answers: Sequence[Answer], questions: Sequence) -> int:
    """Count answers whose selection equals the current correct option.

    Duplicate answers to the same question each count on their own.
    """
    return sum(1 for graded in grade_answers(answers, questions) if graded.is_correct)
