"""Quiz generation, submission, review and history endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from quizgen.core.config import settings
from quizgen.schemas import (
    AttemptHistory,
    AttemptReview,
    ErrorResponse,
    GenerateQuizRequest,
    GenerateQuizResponse,
    Quiz,
    QuizList,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from quizgen.services.quiz_service import QuizService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=settings.API_V1_STR,
    tags=["quizzes"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def get_quiz_service(request: Request) -> QuizService:
    service: Optional[QuizService] = getattr(request.app.state, "quiz_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Services not initialized")
    return service


def _clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return settings.HISTORY_DEFAULT_LIMIT
    return max(1, min(limit, settings.HISTORY_MAX_LIMIT))


@router.post(
    "/quizzes/generate",
    response_model=GenerateQuizResponse,
    responses={402: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def generate_quiz(body: GenerateQuizRequest, request: Request):
    """
    Generate a 5-question quiz for a topic and store it.
    """
    quiz_id = await get_quiz_service(request).generate_quiz(body.topic)
    return GenerateQuizResponse(quizId=quiz_id)


@router.post("/quizzes/submit", response_model=SubmitQuizResponse)
async def submit_quiz(body: SubmitQuizRequest, request: Request):
    """
    Score submitted answers against a stored quiz and record the attempt.
    """
    return await get_quiz_service(request).submit_answers(body.quizId, body.answers)


@router.get("/quizzes", response_model=QuizList)
async def list_quizzes(request: Request, limit: Optional[int] = Query(None, ge=1)):
    quizzes = await get_quiz_service(request).list_quizzes(_clamp_limit(limit))
    return QuizList(quizzes=quizzes)


@router.get("/quizzes/{quiz_id}", response_model=Quiz)
async def get_quiz(quiz_id: str, request: Request):
    return await get_quiz_service(request).get_quiz(quiz_id)


@router.get("/attempts", response_model=AttemptHistory)
async def list_attempts(request: Request, limit: Optional[int] = Query(None, ge=1)):
    """Attempt history, newest first, each joined with its quiz."""
    attempts = await get_quiz_service(request).list_attempt_history(_clamp_limit(limit))
    return AttemptHistory(attempts=attempts)


@router.get("/attempts/{attempt_id}", response_model=AttemptReview)
async def get_attempt(attempt_id: str, request: Request):
    """Attempt with its quiz for review. `reviewAvailable` is false if the quiz was deleted."""
    return await get_quiz_service(request).get_attempt_review(attempt_id)
