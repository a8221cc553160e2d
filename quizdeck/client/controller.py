"""
Client-side controller: owns one quiz session and the API client, and turns
discrete user events into state-machine transitions and API calls.

Every failure leaves the session in the state it had before the event and
is reported through ``message``.
"""
import json
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from quizdeck.client import session as sm
from quizdeck.client.api import APIClientError, QuizAPIClient

logger = logging.getLogger(__name__)

POINTS_PER_CORRECT = 10


@dataclass(frozen=True)
class HighScoreRow:
    rank: int
    user_name: str
    module_name: str
    correct_count: int

    @property
    def points(self) -> int:
        return self.correct_count * POINTS_PER_CORRECT


class QuizController:
    def __init__(self, api: QuizAPIClient, rng: Optional[random.Random] = None):
        self.api = api
        self.session = sm.QuizSession()
        self.modules: List[str] = []
        self.high_scores: List[HighScoreRow] = []
        # user-visible status / error text of the last action
        self.message: Optional[str] = None
        self.save_enabled = False
        self._rng = rng

    @property
    def phase(self) -> sm.Phase:
        return self.session.phase

    @property
    def summary(self) -> Optional[sm.QuizSummary]:
        return self.session.summary

    @property
    def title(self) -> str:
        if self.session.is_review_mode:
            return f"REVIEW: {self.session.module_name}"
        return self.session.module_name

    def _fail(self, action: str, error) -> None:
        logger.error("%s failed: %s", action, error)
        self.message = f"{action} failed: {error}"

    # -- module selection -------------------------------------------------

    async def load_modules(self) -> List[str]:
        try:
            self.modules = await self.api.list_modules()
        except APIClientError as exc:
            self._fail("Loading modules", exc)
            return self.modules
        self.message = None if self.modules else "No modules found. Upload one from the admin area."
        logger.info("Modules available: %s", ", ".join(self.modules) or "none")
        return self.modules

    async def start_quiz(self, module_name: str) -> bool:
        try:
            questions = await self.api.fetch_quiz(module_name)
            self.session = sm.start_quiz(self.session, module_name, questions, rng=self._rng)
        except (APIClientError, sm.SessionError) as exc:
            self._fail("Loading the quiz", exc)
            return False
        self.message = None
        self.save_enabled = False
        logger.info("Started quiz '%s' with %s question(s)", module_name, len(self.session.questions))
        return True

    # -- quiz in progress -------------------------------------------------

    def select_answer(self, option_index: int) -> Optional[sm.AnswerFeedback]:
        before = self.session
        try:
            self.session = sm.select_answer(before, option_index)
        except sm.SessionError as exc:
            self._fail("Selecting an answer", exc)
            return None
        feedback = sm.answer_feedback(self.session)
        if self.session is not before:
            logger.debug(
                "Answer for Q%s: option %s (%s)",
                self.session.current_index + 1, option_index, "correct" if feedback.is_correct else "incorrect",
            )
        return feedback

    def current_feedback(self) -> Optional[sm.AnswerFeedback]:
        if self.phase is not sm.Phase.QUIZ_IN_PROGRESS:
            return None
        return sm.answer_feedback(self.session)

    def progress(self) -> Optional[sm.QuizProgress]:
        if self.phase is not sm.Phase.QUIZ_IN_PROGRESS:
            return None
        return sm.progress(self.session)

    def _navigate(self, transition, *args) -> bool:
        try:
            self.session = transition(self.session, *args)
        except sm.SessionError as exc:
            self._fail("Navigation", exc)
            return False
        return True

    def next_question(self) -> bool:
        return self._navigate(sm.advance)

    def previous_question(self) -> bool:
        return self._navigate(sm.retreat)

    def go_to_question(self, index: int) -> bool:
        return self._navigate(sm.jump, index)

    def submit(self) -> Optional[sm.QuizSummary]:
        try:
            self.session = sm.submit(self.session)
        except sm.SessionError as exc:
            self._fail("Submitting the quiz", exc)
            return None
        self.save_enabled = True
        self.message = None
        summary = self.session.summary
        logger.info(
            "Quiz '%s' finished: %s/%s (%.2f%%)",
            summary.module_name, summary.correct_count, summary.total_questions, summary.percentage,
        )
        return summary

    def abandon(self) -> None:
        self.session = sm.abandon(self.session)
        self.save_enabled = False

    # -- summary ----------------------------------------------------------

    def retry_failed(self, indices: Optional[Sequence[int]] = None) -> bool:
        try:
            self.session = sm.retry_failed(self.session, indices, rng=self._rng)
        except sm.SessionError as exc:
            self._fail("Retrying failed questions", exc)
            return False
        self.save_enabled = False
        self.message = None
        logger.info("Review attempt started with %s question(s)", len(self.session.questions))
        return True

    async def save_score(self, user_name: Optional[str]) -> bool:
        """Post the summarised attempt once. A blank name cancels the save."""
        summary = self.session.summary
        if self.phase is not sm.Phase.SUMMARY or not self.save_enabled:
            return False
        if not user_name or not user_name.strip():
            logger.info("Score save cancelled")
            return False

        self.save_enabled = False
        try:
            await self.api.submit_score(
                summary.module_name, user_name.strip(), summary.correct_count, summary.incorrect_count
            )
        except APIClientError as exc:
            self._fail("Saving the score", exc)
            self.save_enabled = True
            return False
        self.message = "Score saved! Check the leaderboard."
        return True

    # -- high scores ------------------------------------------------------

    async def load_high_scores(self) -> List[HighScoreRow]:
        try:
            scores = await self.api.list_scores()
        except APIClientError as exc:
            self._fail("Loading scores", exc)
            return self.high_scores
        self.high_scores = [
            HighScoreRow(
                rank=position,
                user_name=score.get("userName", ""),
                module_name=score.get("moduleName", ""),
                correct_count=score.get("correctCount", 0),
            )
            for position, score in enumerate(scores, start=1)
        ]
        self.message = None if self.high_scores else "No scores yet. Be the first!"
        return self.high_scores

    # -- admin ------------------------------------------------------------

    async def upload_module(self, json_text: str) -> bool:
        try:
            questions = json.loads(json_text)
        except ValueError as exc:
            self._fail("Uploading the module", f"invalid JSON ({exc})")
            return False
        if not isinstance(questions, list) or not questions:
            self.message = "The payload must be a non-empty JSON array of questions."
            return False

        try:
            result = await self.api.create_module(questions)
        except APIClientError as exc:
            self._fail("Uploading the module", exc)
            return False
        self.message = f"{result['message']} ({result['count']} questions saved)."
        return True

    async def delete_module(self, module_name: str) -> bool:
        try:
            result = await self.api.delete_module(module_name)
        except APIClientError as exc:
            self._fail("Deleting the module", exc)
            return False
        await self.load_modules()
        self.message = result["message"]
        return True
