from typing import List

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ModuleCreatedResponse(MessageResponse):
    count: int


class ModuleListResponse(BaseModel):
    modules: List[str]
