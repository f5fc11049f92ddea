"""
Shared pytest fixtures: quiz payloads, deterministic stand-ins for the
generative service and the encyclopedia lookup, and in-memory stores.
"""

import copy
import json
import os
from typing import List, Optional, Sequence

import pytest

# Keep tests independent of a developer's .env
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("CONTEXT_ENABLED", "false")

from quizgen.services.context_retriever import ContextRetriever  # noqa: E402
from quizgen.services.question_generator import QuestionGenerator  # noqa: E402
from quizgen.services.quiz_service import QuizService  # noqa: E402
from quizgen.storage import InMemoryAttemptStore, InMemoryQuizStore  # noqa: E402

SOLAR_SYSTEM_CORRECT = ("A", "B", "C", "C", "D")


def make_quiz_payload(topic: str = "Solar System", correct: Sequence[str] = SOLAR_SYSTEM_CORRECT) -> dict:
    """A generated quiz that satisfies the schema."""
    return {
        "topic": topic,
        "questions": [
            {
                "id": f"q{i}",
                "stem": f"Question {i} about {topic}?",
                "options": {"A": "Mercury", "B": "Venus", "C": "Earth", "D": "Mars"},
                "correct": label,
                "explanation": f"{label} is correct for question {i}.",
            }
            for i, label in enumerate(correct, start=1)
        ],
    }


class StubLLM:
    """TextGenerator that returns canned text or raises a canned error."""

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None):
        self.response = response if response is not None else json.dumps(make_quiz_payload())
        self.error = error
        self.calls: List[tuple] = []

    async def generate(self, system: str, user: str) -> str:
        self.calls.append((system, user))
        if self.error is not None:
            raise self.error
        return self.response


class StubRetriever(ContextRetriever):
    """ContextRetriever that never touches the network."""

    def __init__(self, summary: Optional[str] = None):
        self.summary = summary
        self.calls: List[str] = []

    async def fetch_summary(self, topic: str) -> Optional[str]:
        self.calls.append(topic)
        return self.summary

    async def aclose(self) -> None:
        pass


@pytest.fixture
def quiz_payload():
    return copy.deepcopy(make_quiz_payload())


@pytest.fixture
def stub_llm():
    return StubLLM()


@pytest.fixture
def stub_retriever():
    return StubRetriever(summary="The Solar System is the Sun and the objects that orbit it.")


@pytest.fixture
def quiz_store():
    return InMemoryQuizStore()


@pytest.fixture
def attempt_store():
    return InMemoryAttemptStore()


@pytest.fixture
def quiz_service(stub_llm, stub_retriever, quiz_store, attempt_store):
    return QuizService(
        retriever=stub_retriever,
        generator=QuestionGenerator(stub_llm),
        quiz_store=quiz_store,
        attempt_store=attempt_store,
    )
