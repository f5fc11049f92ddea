"""Persistence adapters for quizzes and attempts."""

import logging
from typing import Tuple

from quizgen.core.config import Settings

from .base import AttemptStore, QuizStore
from .memory import InMemoryAttemptStore, InMemoryQuizStore
from .redis_store import RedisAttemptStore, RedisQuizStore, create_redis_client

logger = logging.getLogger(__name__)


def create_stores(config: Settings) -> Tuple[QuizStore, AttemptStore]:
    """Build the quiz and attempt stores selected by STORAGE_BACKEND."""
    if config.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage (data is lost on restart)")
        return InMemoryQuizStore(), InMemoryAttemptStore()

    if config.STORAGE_BACKEND != "redis":
        raise ValueError(f"Unknown STORAGE_BACKEND: {config.STORAGE_BACKEND}")

    client = create_redis_client(config)
    logger.info(f"Using Redis storage: {config.REDIS_URL}")
    return (
        RedisQuizStore(client, prefix=config.REDIS_KEY_PREFIX),
        RedisAttemptStore(client, prefix=config.REDIS_KEY_PREFIX),
    )


__all__ = [
    "AttemptStore",
    "InMemoryAttemptStore",
    "InMemoryQuizStore",
    "QuizStore",
    "RedisAttemptStore",
    "RedisQuizStore",
    "create_redis_client",
    "create_stores",
]
