"""
Redis-backed quiz and attempt stores.

Layout:
- `<prefix>:quiz:<id>` / `<prefix>:attempt:<id>`: record JSON
- `<prefix>:quizzes` / `<prefix>:attempts`: sorted set of ids scored by
  creation time, for newest-first listing

The record and its index entry are written in one MULTI/EXEC transaction.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError
from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from quizgen.core.config import Settings
from quizgen.core.exceptions import PersistenceError
from quizgen.schemas.quiz import Attempt, Question, Quiz

logger = logging.getLogger(__name__)


def create_redis_client(config: Settings) -> Redis:
    """Create a pooled async Redis client from settings."""
    pool = ConnectionPool.from_url(
        config.REDIS_URL,
        max_connections=config.REDIS_MAX_CONNECTIONS,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=config.REDIS_SOCKET_CONNECT_TIMEOUT,
        password=config.REDIS_PASSWORD,
        decode_responses=True
    )
    return Redis(connection_pool=pool)


class _RedisRecordStore:
    """Shared create/get/list plumbing for one record type."""

    record_type: Type[BaseModel]
    kind: str
    plural: str

    def __init__(self, client: Redis, prefix: str = "quizgen"):
        self.client = client
        self.prefix = prefix

    def _key(self, record_id: str) -> str:
        return f"{self.prefix}:{self.kind}:{record_id}"

    @property
    def _index_key(self) -> str:
        return f"{self.prefix}:{self.plural}"

    async def _save(self, record: BaseModel) -> None:
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.set(self._key(record.id), record.model_dump_json())
                pipe.zadd(self._index_key, {record.id: record.createdAt.timestamp()})
                await pipe.execute()
        except RedisError as e:
            logger.error(f"Redis write error for {self.kind} {record.id}: {e}")
            raise PersistenceError(f"Failed to save {self.kind}") from e

        logger.info(f"💾 Saved {self.kind} {record.id}", extra={f"{self.kind}_id": record.id})

    def _decode(self, raw: str) -> BaseModel:
        try:
            return self.record_type.model_validate_json(raw)
        except PydanticValidationError as e:
            raise PersistenceError(f"Stored {self.kind} record is corrupt") from e

    async def _load(self, record_id: str) -> Optional[BaseModel]:
        try:
            raw = await self.client.get(self._key(record_id))
        except RedisError as e:
            logger.error(f"Redis read error for {self.kind} {record_id}: {e}")
            raise PersistenceError(f"Failed to load {self.kind}") from e

        if raw is None:
            return None
        return self._decode(raw)

    async def _load_newest(self, limit: int) -> List[BaseModel]:
        if limit <= 0:
            return []
        try:
            ids = await self.client.zrevrange(self._index_key, 0, limit - 1)
            if not ids:
                return []
            raws = await self.client.mget([self._key(record_id) for record_id in ids])
        except RedisError as e:
            logger.error(f"Redis list error for {self.plural}: {e}")
            raise PersistenceError(f"Failed to list {self.plural}") from e

        # Index entries can outlive deleted records
        return [self._decode(raw) for raw in raws if raw is not None]

    async def health_check(self) -> Dict[str, Any]:
        try:
            await self.client.ping()
            info = await self.client.info("server")
            return {
                "status": "healthy",
                "backend": "redis",
                "version": info.get("redis_version", "unknown"),
                "connected": True
            }
        except RedisError as e:
            return {
                "status": "unhealthy",
                "backend": "redis",
                "error": str(e),
                "connected": False
            }

    async def aclose(self) -> None:
        """Close the client and disconnect its connection pool."""
        await self.client.aclose(close_connection_pool=True)
        logger.info(f"Closed Redis connection for {self.plural}")


class RedisQuizStore(_RedisRecordStore):
    record_type = Quiz
    kind = "quiz"
    plural = "quizzes"

    async def create(self, topic: str, context: Optional[str], questions: Sequence[Question]) -> str:
        quiz = Quiz(
            id=str(uuid.uuid4()),
            topic=topic,
            context=context,
            questions=list(questions),
            createdAt=datetime.now(timezone.utc),
        )
        await self._save(quiz)
        return quiz.id

    async def get(self, quiz_id: str) -> Optional[Quiz]:
        return await self._load(quiz_id)

    async def list(self, limit: int) -> List[Quiz]:
        return await self._load_newest(limit)

    async def delete(self, quiz_id: str) -> bool:
        """Delete a quiz. Attempts that reference it are left in place."""
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.delete(self._key(quiz_id))
                pipe.zrem(self._index_key, quiz_id)
                deleted, _ = await pipe.execute()
        except RedisError as e:
            logger.error(f"Redis delete error for quiz {quiz_id}: {e}")
            raise PersistenceError("Failed to delete quiz") from e
        return bool(deleted)


class RedisAttemptStore(_RedisRecordStore):
    record_type = Attempt
    kind = "attempt"
    plural = "attempts"

    async def create(self, quiz_id: str, answers: Mapping[str, str], score: int) -> str:
        attempt = Attempt(
            id=str(uuid.uuid4()),
            quizId=quiz_id,
            answers=dict(answers),
            score=score,
            createdAt=datetime.now(timezone.utc),
        )
        await self._save(attempt)
        return attempt.id

    async def get(self, attempt_id: str) -> Optional[Attempt]:
        return await self._load(attempt_id)

    async def list(self, limit: int) -> List[Attempt]:
        return await self._load_newest(limit)
