"""
Quiz-related Pydantic schemas.

`GeneratedQuiz` is the contract the generative service must satisfy;
`Quiz` and `Attempt` are the persisted records.
"""

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from quizgen.core.constants import MAX_TOPIC_LENGTH, QUESTION_COUNT

NonEmptyStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
Label = Literal["A", "B", "C", "D"]


class QuizOptions(BaseModel):
    """The four labeled answer options."""
    model_config = ConfigDict(extra="forbid")

    A: NonEmptyStr
    B: NonEmptyStr
    C: NonEmptyStr
    D: NonEmptyStr


class Question(BaseModel):
    """Individual quiz question."""
    model_config = ConfigDict(extra="forbid")

    id: NonEmptyStr = Field(..., description="Unique within its quiz, conventionally q1..q5")
    stem: NonEmptyStr
    options: QuizOptions
    correct: Label
    explanation: NonEmptyStr


def _check_unique_ids(questions: List[Question]) -> None:
    seen = set()
    for question in questions:
        if question.id in seen:
            raise ValueError(f"duplicate question id '{question.id}'")
        seen.add(question.id)


class GeneratedQuiz(BaseModel):
    """Quiz payload as returned by the generative service."""
    model_config = ConfigDict(extra="forbid")

    topic: NonEmptyStr
    questions: List[Question] = Field(..., min_length=QUESTION_COUNT, max_length=QUESTION_COUNT)

    @model_validator(mode="after")
    def unique_question_ids(self) -> "GeneratedQuiz":
        _check_unique_ids(self.questions)
        return self


class Quiz(BaseModel):
    """Persisted quiz. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: str
    topic: str = Field(..., min_length=1, max_length=MAX_TOPIC_LENGTH)
    context: Optional[str] = Field(None, description="Encyclopedia summary used as generation context")
    questions: List[Question] = Field(..., min_length=QUESTION_COUNT, max_length=QUESTION_COUNT)
    createdAt: datetime


class Attempt(BaseModel):
    """Persisted scored attempt. `quizId` is a weak reference."""
    model_config = ConfigDict(frozen=True)

    id: str
    quizId: str
    answers: Dict[str, str]
    score: int = Field(..., ge=0, le=QUESTION_COUNT)
    createdAt: datetime
