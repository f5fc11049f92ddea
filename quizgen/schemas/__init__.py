"""Schemas package."""

from .quiz import Attempt, GeneratedQuiz, Question, Quiz, QuizOptions
from .requests import GenerateQuizRequest, SubmitQuizRequest
from .responses import (
    AttemptHistory,
    AttemptReview,
    ErrorResponse,
    GenerateQuizResponse,
    QuizList,
    SubmitQuizResponse,
)

__all__ = [
    # Quiz
    "Attempt",
    "GeneratedQuiz",
    "Question",
    "Quiz",
    "QuizOptions",
    # Requests
    "GenerateQuizRequest",
    "SubmitQuizRequest",
    # Responses
    "AttemptHistory",
    "AttemptReview",
    "ErrorResponse",
    "GenerateQuizResponse",
    "QuizList",
    "SubmitQuizResponse",
]
