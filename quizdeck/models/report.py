from datetime import datetime
from enum import Enum

from beanie import Document, PydanticObjectId
from pydantic import Field

from quizdeck.models.score import utcnow


class ReportStatus(str, Enum):
    PENDING = "Pending"
    REVIEWED = "Reviewed"
    DELETED = "Deleted"


class Report(Document):
    """User report against a question. Reserved: only removed by module deletion."""
    questionId: PydanticObjectId
    moduleName: str
    reason: str
    status: ReportStatus = ReportStatus.PENDING
    reportCount: int = Field(default=1, ge=1)
    date: datetime = Field(default_factory=utcnow)

    class Settings:
        collection = "reports"
