from typing import List

from pydantic import BaseModel, ConfigDict, Field

from quizdeck.models.question import Question


class QuestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    moduleName: str
    question: str
    options: List[str]
    correct: int
    explanation: str

    @classmethod
    def from_document(cls, q: Question) -> "QuestionResponse":
        return cls(
            id=str(q.id),
            moduleName=q.moduleName,
            question=q.question,
            options=q.options,
            correct=q.correct,
            explanation=q.explanation,
        )


class QuizResponse(BaseModel):
    moduleName: str
    questions: List[QuestionResponse]
