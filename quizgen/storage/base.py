"""Storage interfaces for quizzes and attempts.

Records are created once and never updated. `create` is atomic: it either
persists the whole record or nothing, raising PersistenceError.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from quizgen.schemas.quiz import Attempt, Question, Quiz


class QuizStore(Protocol):
    async def create(self, topic: str, context: Optional[str], questions: Sequence[Question]) -> str:
        ...

    async def get(self, quiz_id: str) -> Optional[Quiz]:
        ...

    async def list(self, limit: int) -> List[Quiz]:
        """Newest first."""
        ...

    async def delete(self, quiz_id: str) -> bool:
        ...

    async def health_check(self) -> Dict[str, Any]:
        ...

    async def aclose(self) -> None:
        ...


class AttemptStore(Protocol):
    async def create(self, quiz_id: str, answers: Mapping[str, str], score: int) -> str:
        ...

    async def get(self, attempt_id: str) -> Optional[Attempt]:
        ...

    async def list(self, limit: int) -> List[Attempt]:
        """Newest first."""
        ...

    async def aclose(self) -> None:
        ...
