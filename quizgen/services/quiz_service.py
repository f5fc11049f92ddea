"""
Quiz generation and scoring pipelines.

generate: validate topic -> content policy -> context -> generation ->
          parse -> schema validation -> persist
submit:   load quiz -> score -> persist attempt

Stages run strictly in order and are never retried here. A failed
`generate` persists nothing.
"""

import logging
from typing import Any, List, Optional

from quizgen.core.constants import get_option_labels
from quizgen.core.exceptions import NotFound, ValidationError
from quizgen.core.parsers import QuizOutputParser
from quizgen.schemas import AttemptReview, Quiz, SubmitQuizResponse
from quizgen.schemas.quiz import Attempt
from quizgen.services.context_retriever import ContextRetriever
from quizgen.services.question_generator import QuestionGenerator
from quizgen.services.schema_validator import validate_quiz_payload
from quizgen.services.scoring import score
from quizgen.services.topic_policy import check_topic_allowed, validate_topic
from quizgen.storage import AttemptStore, QuizStore

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(
        self,
        retriever: ContextRetriever,
        generator: QuestionGenerator,
        quiz_store: QuizStore,
        attempt_store: AttemptStore,
        parser: Optional[QuizOutputParser] = None,
    ):
        self.retriever = retriever
        self.generator = generator
        self.quiz_store = quiz_store
        self.attempt_store = attempt_store
        self.parser = parser or QuizOutputParser()

    async def generate_quiz(self, raw_topic: Any) -> str:
        """Run the generation pipeline and return the new quiz id."""
        # 1. Input checks, before any network call
        topic = validate_topic(raw_topic)
        check_topic_allowed(topic)

        # 2. Advisory context
        context = await self.retriever.fetch_summary(topic)

        # 3. Single generation call
        raw_text = await self.generator.generate(topic, context)

        # 4. Parse and enforce the contract
        payload = self.parser.parse(raw_text)
        generated = validate_quiz_payload(payload)

        # 5. Persist
        quiz_id = await self.quiz_store.create(topic, context, generated.questions)
        logger.info(f"✅ Quiz {quiz_id} created for '{topic}'", extra={"quiz_id": quiz_id, "topic": topic})
        return quiz_id

    async def submit_answers(self, quiz_id: Any, answers: Any) -> SubmitQuizResponse:
        """Score answers against a stored quiz and persist the attempt."""
        if not isinstance(quiz_id, str) or not quiz_id.strip():
            raise ValidationError("Quiz ID is required")
        if not isinstance(answers, dict):
            raise ValidationError("Answers are required")
        self._check_answer_labels(answers)

        quiz = await self.quiz_store.get(quiz_id)
        if quiz is None:
            raise NotFound("Quiz not found")

        result = score(quiz.questions, answers)
        attempt_id = await self.attempt_store.create(quiz.id, answers, result)
        logger.info(
            f"📝 Attempt {attempt_id} scored {result}/{len(quiz.questions)}",
            extra={"quiz_id": quiz.id, "attempt_id": attempt_id}
        )
        return SubmitQuizResponse(attemptId=attempt_id, score=result)

    @staticmethod
    def _check_answer_labels(answers: dict) -> None:
        labels = set(get_option_labels())
        for question_id, label in answers.items():
            if not isinstance(question_id, str) or not isinstance(label, str):
                raise ValidationError("Answers must map question ids to option labels")
            if label not in labels:
                raise ValidationError(f"Invalid answer '{label}' for question '{question_id}'")

    async def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = await self.quiz_store.get(quiz_id)
        if quiz is None:
            raise NotFound("Quiz not found")
        return quiz

    async def list_quizzes(self, limit: int) -> List[Quiz]:
        return await self.quiz_store.list(limit)

    async def get_attempt_review(self, attempt_id: str) -> AttemptReview:
        """Attempt joined with its quiz; degrades to no review if the quiz is gone."""
        attempt = await self.attempt_store.get(attempt_id)
        if attempt is None:
            raise NotFound("Attempt not found")
        return await self._review(attempt)

    async def list_attempt_history(self, limit: int) -> List[AttemptReview]:
        attempts = await self.attempt_store.list(limit)
        return [await self._review(attempt) for attempt in attempts]

    async def _review(self, attempt: Attempt) -> AttemptReview:
        quiz = await self.quiz_store.get(attempt.quizId)
        return AttemptReview(
            **attempt.model_dump(),
            quiz=quiz,
            reviewAvailable=quiz is not None,
        )
