import logging
from typing import List

from pymongo.errors import PyMongoError

from quizdeck.core.exceptions import InternalError, QuizValidationError
from quizdeck.models.score import ANONYMOUS_USER, Score
from quizdeck.schemas.req.score import ScoreCreateDTO

logger = logging.getLogger(__name__)


class ScoreService:
    async def submit_score(self, score_data: ScoreCreateDTO) -> Score:
        """Persist an attempt. Totals and percentage are always computed here."""
        if score_data.correctCount + score_data.incorrectCount == 0:
            raise QuizValidationError("correctCount and incorrectCount cannot both be zero.")

        user_name = (score_data.userName or "").strip() or ANONYMOUS_USER
        score = Score.from_counts(
            module_name=score_data.moduleName,
            user_name=user_name,
            correct_count=score_data.correctCount,
            incorrect_count=score_data.incorrectCount,
        )
        try:
            await score.insert()
        except PyMongoError:
            logger.exception("Failed to save score for module '%s'", score_data.moduleName)
            raise InternalError("Internal server error while saving the score.")

        logger.info(
            "Score saved: %s on '%s' %s/%s (%s%%)",
            score.userName, score.moduleName, score.correctCount, score.totalQuestions, score.percentage,
        )
        return score

    async def get_all_scores(self) -> List[Score]:
        """Every stored score in the store's natural order"""
        try:
            return await Score.find_all().to_list()
        except PyMongoError:
            logger.exception("Failed to list scores")
            raise InternalError("Internal server error while loading scores.")
