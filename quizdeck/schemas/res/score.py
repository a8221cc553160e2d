from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quizdeck.models.score import Score


class ScoreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    moduleName: str
    userName: str
    date: datetime
    correctCount: int
    incorrectCount: int
    totalQuestions: int
    percentage: float

    @classmethod
    def from_document(cls, s: Score) -> "ScoreResponse":
        return cls(
            id=str(s.id),
            moduleName=s.moduleName,
            userName=s.userName,
            date=s.date,
            correctCount=s.correctCount,
            incorrectCount=s.incorrectCount,
            totalQuestions=s.totalQuestions,
            percentage=s.percentage,
        )


class ScoreCreatedResponse(BaseModel):
    message: str
    score: ScoreResponse
