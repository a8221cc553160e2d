from typing import List

from pydantic import BaseModel, Field, model_validator

from quizdeck.models.question import DEFAULT_EXPLANATION


class QuestionCreateDTO(BaseModel):
    """One question record of a module upload"""
    moduleName: str = Field(min_length=1)
    question: str = Field(min_length=1)
    options: List[str] = Field(min_length=2)
    correct: int
    explanation: str = DEFAULT_EXPLANATION

    @model_validator(mode="after")
    def check_correct_index(self):
        if not 0 <= self.correct < len(self.options):
            raise ValueError(
                f"'correct' must be an index into options (0..{len(self.options) - 1}), got {self.correct}"
            )
        return self
