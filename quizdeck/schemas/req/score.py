from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class ScoreCreateDTO(BaseModel):
    moduleName: str = Field(min_length=1)
    # older clients post the name as "username"
    userName: Optional[str] = Field(default=None, validation_alias=AliasChoices("userName", "username"))
    correctCount: int = Field(ge=0)
    incorrectCount: int = Field(ge=0)
