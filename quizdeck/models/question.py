from typing import List

from beanie import Document

DEFAULT_EXPLANATION = "No explanation available."


class Question(Document):
    """A multiple-choice question belonging to a module"""
    moduleName: str
    question: str
    options: List[str]
    correct: int  # index into options
    explanation: str = DEFAULT_EXPLANATION

    class Settings:
        collection = "questions"
