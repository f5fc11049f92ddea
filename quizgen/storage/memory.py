"""In-process stores for development and tests."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from quizgen.schemas.quiz import Attempt, Question, Quiz


class InMemoryQuizStore:
    def __init__(self):
        self._quizzes: Dict[str, Quiz] = {}

    async def create(self, topic: str, context: Optional[str], questions: Sequence[Question]) -> str:
        quiz = Quiz(
            id=str(uuid.uuid4()),
            topic=topic,
            context=context,
            questions=list(questions),
            createdAt=datetime.now(timezone.utc),
        )
        self._quizzes[quiz.id] = quiz
        return quiz.id

    async def get(self, quiz_id: str) -> Optional[Quiz]:
        return self._quizzes.get(quiz_id)

    async def list(self, limit: int) -> List[Quiz]:
        # dicts keep insertion order, which is creation order
        return list(reversed(self._quizzes.values()))[:limit]

    async def delete(self, quiz_id: str) -> bool:
        return self._quizzes.pop(quiz_id, None) is not None

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "backend": "memory", "quizzes": len(self._quizzes)}

    async def aclose(self) -> None:
        pass


class InMemoryAttemptStore:
    def __init__(self):
        self._attempts: Dict[str, Attempt] = {}

    async def create(self, quiz_id: str, answers: Mapping[str, str], score: int) -> str:
        attempt = Attempt(
            id=str(uuid.uuid4()),
            quizId=quiz_id,
            answers=dict(answers),
            score=score,
            createdAt=datetime.now(timezone.utc),
        )
        self._attempts[attempt.id] = attempt
        return attempt.id

    async def get(self, attempt_id: str) -> Optional[Attempt]:
        return self._attempts.get(attempt_id)

    async def list(self, limit: int) -> List[Attempt]:
        return list(reversed(self._attempts.values()))[:limit]

    async def aclose(self) -> None:
        pass
