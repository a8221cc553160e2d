import logging
from typing import List

from pymongo.errors import PyMongoError

from quizdeck.core.exceptions import InternalError, QuizValidationError
from quizdeck.models.question import Question
from quizdeck.models.report import Report
from quizdeck.models.score import Score
from quizdeck.schemas.req.module import QuestionCreateDTO

logger = logging.getLogger(__name__)


class ModuleService:
    async def list_modules(self) -> List[str]:
        """Distinct module names among stored questions"""
        try:
            return await Question.distinct("moduleName")
        except PyMongoError:
            logger.exception("Failed to list modules")
            raise InternalError("Internal server error while listing modules.")

    async def create_module(self, questions_data: List[QuestionCreateDTO]) -> int:
        """Replace every question of a module with the uploaded ones.

        Not transactional: the old questions are deleted before the new ones
        are inserted, so a failure in between leaves the module empty and the
        upload has to be retried.
        """
        if not questions_data:
            raise QuizValidationError("Request body must be a non-empty array of questions.")

        module_names = {q.moduleName for q in questions_data}
        if len(module_names) > 1:
            raise QuizValidationError(
                f"All questions must share one moduleName, got {len(module_names)}: {sorted(module_names)}"
            )
        module_name = questions_data[0].moduleName

        try:
            removed = await Question.find(Question.moduleName == module_name).delete()
            result = await Question.insert_many(
                [Question(**q.model_dump()) for q in questions_data]
            )
        except PyMongoError:
            logger.exception("Failed to store questions for module '%s'", module_name)
            raise InternalError("Internal server error while processing the questions.")

        count = len(result.inserted_ids)
        logger.info(
            "Module '%s' replaced: %s old question(s) removed, %s inserted",
            module_name, _deleted(removed), count,
        )
        return count

    async def delete_module(self, module_name: str) -> None:
        """Remove a module's questions, scores and reports. Missing modules are a no-op."""
        try:
            questions = await Question.find(Question.moduleName == module_name).delete()
            scores = await Score.find(Score.moduleName == module_name).delete()
            reports = await Report.find(Report.moduleName == module_name).delete()
        except PyMongoError:
            logger.exception("Failed to delete module '%s'", module_name)
            raise InternalError("Internal server error while deleting the module.")

        logger.info(
            "Module '%s' deleted: %s question(s), %s score(s), %s report(s)",
            module_name, _deleted(questions), _deleted(scores), _deleted(reports),
        )


def _deleted(result) -> int:
    return result.deleted_count if result is not None else 0
