import logging
import random
from typing import List

from pymongo.errors import PyMongoError

from quizdeck.core.exceptions import InternalError, ModuleNotFound
from quizdeck.models.question import Question

logger = logging.getLogger(__name__)


class QuizService:
    async def get_quiz_questions(self, module_name: str) -> List[Question]:
        """All questions of a module, in a fresh random order on every call"""
        try:
            questions = await Question.find(Question.moduleName == module_name).to_list()
        except PyMongoError:
            logger.exception("Failed to load quiz for module '%s'", module_name)
            raise InternalError("Internal server error while loading the quiz.")

        if not questions:
            raise ModuleNotFound(module_name)

        random.shuffle(questions)
        logger.debug("Serving %s shuffled question(s) for module '%s'", len(questions), module_name)
        return questions
