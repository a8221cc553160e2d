"""Quiz attempt state machine.

A :class:`QuizSession` is an immutable value; every transition is a plain
function taking the current session (plus the event's arguments) and
returning the next one, so the whole flow can be driven and tested
without any UI.

Phases::

    MODULE_SELECTION -> QUIZ_IN_PROGRESS -> SUMMARY
                              ^                |
                              +-- retry_failed +   (is_review_mode=True)
"""
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

MASTERED_THRESHOLD = 90
PROFICIENT_THRESHOLD = 70


class Phase(str, Enum):
    MODULE_SELECTION = "module_selection"
    QUIZ_IN_PROGRESS = "quiz_in_progress"
    SUMMARY = "summary"


class Tier(str, Enum):
    MASTERED = "mastered"
    PROFICIENT = "proficient"
    NEEDS_REVIEW = "needs_review"


TIER_MESSAGES = {
    Tier.MASTERED: "Excellent! You have fully mastered this module.",
    Tier.PROFICIENT: "Good job, you have a solid grasp of this module.",
    Tier.NEEDS_REVIEW: "You need to study this module some more.",
}


class SessionError(Exception):
    """An event that is not valid for the session's current state."""


@dataclass(frozen=True)
class QuizQuestion:
    id: Optional[str]
    module_name: str
    question: str
    options: Tuple[str, ...]
    correct: int
    explanation: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizQuestion":
        return cls(
            id=data.get("_id"),
            module_name=data["moduleName"],
            question=data["question"],
            options=tuple(data["options"]),
            correct=data["correct"],
            explanation=data.get("explanation") or "",
        )

    @property
    def correct_option(self) -> str:
        return self.options[self.correct]


@dataclass(frozen=True)
class AnswerFeedback:
    selected_index: int
    correct_index: int
    is_correct: bool
    correct_option: str
    explanation: str


@dataclass(frozen=True)
class QuizSummary:
    module_name: str
    correct_count: int
    incorrect_count: int
    percentage: float
    tier: Tier
    failed_indices: Tuple[int, ...]
    is_review_mode: bool = False

    @property
    def total_questions(self) -> int:
        return self.correct_count + self.incorrect_count

    @property
    def can_retry_failed(self) -> bool:
        return bool(self.failed_indices)

    @property
    def message(self) -> str:
        return TIER_MESSAGES[self.tier]


@dataclass(frozen=True)
class QuizProgress:
    current: int  # 1-based
    total: int
    correct_so_far: int
    is_last: bool
    # per question: "unanswered", "correct" or "incorrect"
    statuses: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return f"{self.current}/{self.total}"

    @property
    def fraction(self) -> float:
        return self.current / self.total


@dataclass(frozen=True)
class QuizSession:
    module_name: str = ""
    questions: Tuple[QuizQuestion, ...] = ()
    answers: Tuple[Optional[int], ...] = ()
    correct_flags: Tuple[Optional[bool], ...] = ()
    current_index: int = 0
    is_review_mode: bool = False
    # order of the last full (non-review) attempt
    original_order: Tuple[QuizQuestion, ...] = ()
    phase: Phase = Phase.MODULE_SELECTION
    summary: Optional[QuizSummary] = None

    @property
    def current_question(self) -> QuizQuestion:
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def correct_count(self) -> int:
        return sum(1 for flag in self.correct_flags if flag)


def shuffled(items: Iterable, rng: Optional[random.Random] = None) -> List:
    """Uniform random permutation of ``items`` (Fisher-Yates)."""
    items = list(items)
    (rng or random).shuffle(items)
    return items


def percentage_of(correct_count: int, total: int) -> float:
    if total <= 0:
        raise SessionError("Cannot compute a percentage over zero questions")
    return round(100 * correct_count / total, 2)


def tier_for(percentage: float) -> Tier:
    if percentage >= MASTERED_THRESHOLD:
        return Tier.MASTERED
    if percentage >= PROFICIENT_THRESHOLD:
        return Tier.PROFICIENT
    return Tier.NEEDS_REVIEW


def _require_phase(session: QuizSession, phase: Phase) -> None:
    if session.phase is not phase:
        raise SessionError(f"Expected phase {phase.value}, session is in {session.phase.value}")


def start_quiz(
    session: QuizSession,
    module_name: str,
    questions: Sequence[QuizQuestion],
    review: bool = False,
    rng: Optional[random.Random] = None,
) -> QuizSession:
    """Begin an attempt over a shuffled copy of ``questions``.

    A full attempt records its order as ``original_order``; a review attempt
    keeps the one it inherited from ``session``.
    """
    if not questions:
        raise SessionError(f"Module '{module_name}' has no questions")

    order = tuple(shuffled(questions, rng))
    count = len(order)
    return QuizSession(
        module_name=module_name,
        questions=order,
        answers=(None,) * count,
        correct_flags=(None,) * count,
        current_index=0,
        is_review_mode=review,
        original_order=session.original_order if review else order,
        phase=Phase.QUIZ_IN_PROGRESS,
    )


def select_answer(session: QuizSession, option_index: int) -> QuizSession:
    """Record the answer for the current question.

    Only the first selection counts. Selecting again on an answered
    question returns the session unchanged, so the caller re-renders the
    recorded answer.
    """
    _require_phase(session, Phase.QUIZ_IN_PROGRESS)
    i = session.current_index
    if session.answers[i] is not None:
        return session

    question = session.questions[i]
    if not 0 <= option_index < len(question.options):
        raise SessionError(f"Option {option_index} out of range for question {i + 1}")

    answers = list(session.answers)
    flags = list(session.correct_flags)
    answers[i] = option_index
    flags[i] = option_index == question.correct
    return replace(session, answers=tuple(answers), correct_flags=tuple(flags))


def answer_feedback(session: QuizSession, index: Optional[int] = None) -> Optional[AnswerFeedback]:
    """Feedback for question ``index`` (default: current), or None if unanswered."""
    if session.phase is not Phase.QUIZ_IN_PROGRESS:
        return None
    i = session.current_index if index is None else index
    selected = session.answers[i]
    if selected is None:
        return None
    question = session.questions[i]
    return AnswerFeedback(
        selected_index=selected,
        correct_index=question.correct,
        is_correct=bool(session.correct_flags[i]),
        correct_option=question.correct_option,
        explanation=question.explanation,
    )


def advance(session: QuizSession) -> QuizSession:
    _require_phase(session, Phase.QUIZ_IN_PROGRESS)
    return replace(session, current_index=min(session.current_index + 1, len(session.questions) - 1))


def retreat(session: QuizSession) -> QuizSession:
    _require_phase(session, Phase.QUIZ_IN_PROGRESS)
    return replace(session, current_index=max(session.current_index - 1, 0))


def jump(session: QuizSession, index: int) -> QuizSession:
    _require_phase(session, Phase.QUIZ_IN_PROGRESS)
    if not 0 <= index < len(session.questions):
        raise SessionError(f"No question at position {index}")
    return replace(session, current_index=index)


def progress(session: QuizSession) -> QuizProgress:
    _require_phase(session, Phase.QUIZ_IN_PROGRESS)
    statuses = tuple(
        "unanswered" if flag is None else ("correct" if flag else "incorrect")
        for flag in session.correct_flags
    )
    return QuizProgress(
        current=session.current_index + 1,
        total=len(session.questions),
        correct_so_far=session.correct_count,
        is_last=session.is_last_question,
        statuses=statuses,
    )


def submit(session: QuizSession) -> QuizSession:
    """Finish the attempt. Unanswered questions count as incorrect."""
    _require_phase(session, Phase.QUIZ_IN_PROGRESS)
    if not session.is_last_question:
        raise SessionError("The quiz can only be submitted from the last question")

    total = len(session.questions)
    correct = session.correct_count
    percentage = percentage_of(correct, total)
    failed = tuple(i for i, flag in enumerate(session.correct_flags) if not flag)
    summary = QuizSummary(
        module_name=session.module_name,
        correct_count=correct,
        incorrect_count=total - correct,
        percentage=percentage,
        tier=tier_for(percentage),
        failed_indices=failed,
        is_review_mode=session.is_review_mode,
    )
    return replace(session, phase=Phase.SUMMARY, summary=summary)


def retry_failed(
    session: QuizSession,
    indices: Optional[Sequence[int]] = None,
    rng: Optional[random.Random] = None,
) -> QuizSession:
    """Re-run the failed questions as a review attempt.

    Indices are positions in the attempt that was just summarised; for a
    full attempt that is ``original_order``, for a review attempt it is the
    review subset itself.
    """
    _require_phase(session, Phase.SUMMARY)
    if indices is None:
        indices = session.summary.failed_indices
    if not indices:
        raise SessionError("There are no failed questions to retry")

    # a review summary indexes its own subset, not the full attempt
    source = session.questions if session.is_review_mode else session.original_order
    if any(not 0 <= i < len(source) for i in indices):
        raise SessionError(f"Failed question indices {list(indices)} out of range")
    to_retry = [source[i] for i in indices]
    return start_quiz(session, session.module_name, to_retry, review=True, rng=rng)


def abandon(session: QuizSession) -> QuizSession:
    """Drop the current attempt and go back to module selection."""
    return QuizSession(original_order=session.original_order)
