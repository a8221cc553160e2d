from datetime import datetime, timezone

from beanie import Document
from pydantic import Field

ANONYMOUS_USER = "Anonymous"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Score(Document):
    """Result of one submitted quiz attempt. Never updated after insert."""
    moduleName: str
    userName: str = ANONYMOUS_USER
    date: datetime = Field(default_factory=utcnow)
    correctCount: int
    incorrectCount: int
    totalQuestions: int
    percentage: float

    @classmethod
    def from_counts(cls, module_name: str, user_name: str, correct_count: int, incorrect_count: int) -> "Score":
        """Derive totalQuestions and percentage from the raw counts.

        Callers must reject ``correct_count + incorrect_count == 0`` first.
        """
        total = correct_count + incorrect_count
        return cls(
            moduleName=module_name,
            userName=user_name,
            correctCount=correct_count,
            incorrectCount=incorrect_count,
            totalQuestions=total,
            percentage=round(100 * correct_count / total, 2),
        )

    class Settings:
        collection = "scores"
