"""Tests for the in-memory and Redis quiz/attempt stores."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from quizgen.core.exceptions import PersistenceError
from quizgen.schemas.quiz import GeneratedQuiz
from quizgen.storage import (
    InMemoryAttemptStore,
    InMemoryQuizStore,
    RedisAttemptStore,
    RedisQuizStore,
)
from tests.conftest import make_quiz_payload


@pytest.fixture
def questions():
    return GeneratedQuiz.model_validate(make_quiz_payload()).questions


class FakePipeline:
    """Buffers commands like a redis.asyncio transaction pipeline."""

    def __init__(self, redis, fail: bool = False):
        self.redis = redis
        self.fail = fail
        self.commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def set(self, key, value):
        self.commands.append(("set", key, value))
        return self

    def zadd(self, key, mapping):
        self.commands.append(("zadd", key, mapping))
        return self

    def delete(self, key):
        self.commands.append(("delete", key))
        return self

    def zrem(self, key, member):
        self.commands.append(("zrem", key, member))
        return self

    async def execute(self):
        if self.fail:
            raise RedisConnectionError("connection lost")
        return [self.redis.apply(command) for command in self.commands]


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the stores."""

    def __init__(self):
        self.values = {}
        self.sorted_sets = {}
        self.fail_writes = False
        self.pipelines = []
        self.closed_with = None

    def pipeline(self, transaction=True):
        assert transaction is True
        pipe = FakePipeline(self, fail=self.fail_writes)
        self.pipelines.append(pipe)
        return pipe

    def apply(self, command):
        name, key, *args = command
        if name == "set":
            self.values[key] = args[0]
            return True
        if name == "zadd":
            self.sorted_sets.setdefault(key, {}).update(args[0])
            return len(args[0])
        if name == "delete":
            return 1 if self.values.pop(key, None) is not None else 0
        if name == "zrem":
            return 1 if self.sorted_sets.get(key, {}).pop(args[0], None) is not None else 0
        raise AssertionError(name)

    async def get(self, key):
        return self.values.get(key)

    async def mget(self, keys):
        return [self.values.get(key) for key in keys]

    async def zrevrange(self, key, start, end):
        members = sorted(self.sorted_sets.get(key, {}).items(), key=lambda item: item[1], reverse=True)
        return [member for member, _ in members][start:end + 1]

    async def aclose(self, close_connection_pool=None):
        self.closed_with = close_connection_pool


@pytest.fixture
def fake_redis():
    return FakeRedis()


class TestInMemoryStores:
    async def test_quiz_round_trip(self, questions):
        store = InMemoryQuizStore()
        quiz_id = await store.create("Solar System", None, questions)
        quiz = await store.get(quiz_id)
        assert quiz.topic == "Solar System"
        assert quiz.context is None
        assert list(quiz.questions) == list(questions)
        assert quiz.createdAt.tzinfo is not None

    async def test_missing_quiz_is_none(self):
        assert await InMemoryQuizStore().get("nope") is None

    async def test_ids_are_unique(self, questions):
        store = InMemoryQuizStore()
        ids = {await store.create("Solar System", None, questions) for _ in range(5)}
        assert len(ids) == 5

    async def test_attempt_round_trip(self):
        store = InMemoryAttemptStore()
        attempt_id = await store.create("quiz-1", {"q1": "A"}, 1)
        attempt = await store.get(attempt_id)
        assert (attempt.quizId, attempt.answers, attempt.score) == ("quiz-1", {"q1": "A"}, 1)

    async def test_attempt_answers_are_copied(self):
        store = InMemoryAttemptStore()
        answers = {"q1": "A"}
        attempt_id = await store.create("quiz-1", answers, 1)
        answers["q2"] = "B"
        assert (await store.get(attempt_id)).answers == {"q1": "A"}


class TestRedisQuizStore:
    async def test_create_writes_record_and_index_atomically(self, fake_redis, questions):
        store = RedisQuizStore(fake_redis, prefix="test")
        quiz_id = await store.create("Solar System", "context", questions)

        assert len(fake_redis.pipelines) == 1
        assert [c[0] for c in fake_redis.pipelines[0].commands] == ["set", "zadd"]
        record = json.loads(fake_redis.values[f"test:quiz:{quiz_id}"])
        assert record["topic"] == "Solar System"
        assert record["context"] == "context"
        assert len(record["questions"]) == 5
        assert quiz_id in fake_redis.sorted_sets["test:quizzes"]

    async def test_get_round_trip(self, fake_redis, questions):
        store = RedisQuizStore(fake_redis)
        quiz_id = await store.create("Solar System", None, questions)
        quiz = await store.get(quiz_id)
        assert quiz.id == quiz_id
        assert [q.correct for q in quiz.questions] == ["A", "B", "C", "C", "D"]

    async def test_get_missing_is_none(self, fake_redis):
        assert await RedisQuizStore(fake_redis).get("nope") is None

    async def test_write_failure_is_persistence_error(self, fake_redis, questions):
        fake_redis.fail_writes = True
        store = RedisQuizStore(fake_redis)
        with pytest.raises(PersistenceError, match="Failed to save quiz"):
            await store.create("Solar System", None, questions)
        assert fake_redis.values == {}
        assert fake_redis.sorted_sets == {}

    async def test_read_failure_is_persistence_error(self):
        client = MagicMock()
        client.get = AsyncMock(side_effect=RedisConnectionError("down"))
        with pytest.raises(PersistenceError):
            await RedisQuizStore(client).get("some-id")

    async def test_corrupt_record_is_persistence_error(self, fake_redis):
        fake_redis.values["quizgen:quiz:bad"] = '{"id": "bad"}'
        with pytest.raises(PersistenceError, match="corrupt"):
            await RedisQuizStore(fake_redis).get("bad")

    async def test_list_newest_first_skips_deleted(self, fake_redis, questions):
        store = RedisQuizStore(fake_redis)
        first = await store.create("One", None, questions)
        second = await store.create("Two", None, questions)
        third = await store.create("Three", None, questions)
        # Make ordering independent of clock resolution
        fake_redis.sorted_sets["quizgen:quizzes"].update({first: 1.0, second: 2.0, third: 3.0})

        assert [q.id for q in await store.list(10)] == [third, second, first]
        assert [q.id for q in await store.list(2)] == [third, second]

        del fake_redis.values[f"quizgen:quiz:{second}"]
        assert [q.id for q in await store.list(10)] == [third, first]

    async def test_list_zero_limit(self, fake_redis):
        assert await RedisQuizStore(fake_redis).list(0) == []

    async def test_delete(self, fake_redis, questions):
        store = RedisQuizStore(fake_redis)
        quiz_id = await store.create("Solar System", None, questions)
        assert await store.delete(quiz_id) is True
        assert await store.get(quiz_id) is None
        assert await store.delete(quiz_id) is False

    async def test_aclose_disconnects_pool(self, fake_redis):
        await RedisQuizStore(fake_redis).aclose()
        assert fake_redis.closed_with is True


class TestRedisAttemptStore:
    async def test_round_trip(self, fake_redis):
        store = RedisAttemptStore(fake_redis)
        attempt_id = await store.create("quiz-1", {"q1": "A", "q2": "C"}, 2)
        attempt = await store.get(attempt_id)
        assert attempt.quizId == "quiz-1"
        assert attempt.answers == {"q1": "A", "q2": "C"}
        assert attempt.score == 2
        assert attempt_id in fake_redis.sorted_sets["quizgen:attempts"]

    async def test_write_failure_is_persistence_error(self, fake_redis):
        fake_redis.fail_writes = True
        with pytest.raises(PersistenceError, match="Failed to save attempt"):
            await RedisAttemptStore(fake_redis).create("quiz-1", {}, 0)
