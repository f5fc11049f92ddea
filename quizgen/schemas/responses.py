"""Response schemas."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .quiz import Quiz


class ErrorResponse(BaseModel):
    error: str


class GenerateQuizResponse(BaseModel):
    quizId: str


class SubmitQuizResponse(BaseModel):
    attemptId: str
    score: int


class AttemptReview(BaseModel):
    """Attempt joined with its quiz. `quiz` is None once the quiz is gone."""
    id: str
    quizId: str
    answers: Dict[str, str]
    score: int
    createdAt: datetime
    quiz: Optional[Quiz] = None
    reviewAvailable: bool = Field(..., description="False when the referenced quiz no longer exists")


class QuizList(BaseModel):
    quizzes: List[Quiz] = Field(default_factory=list)


class AttemptHistory(BaseModel):
    attempts: List[AttemptReview] = Field(default_factory=list)
