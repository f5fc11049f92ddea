import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quizgen import __version__
from quizgen.core.config import settings
from quizgen.core.exceptions import QuizGenError
from quizgen.core.llm import LLMClient, TextGenerator
from quizgen.core.logging_config import setup_logging
from quizgen.routers import quizzes
from quizgen.services.context_retriever import ContextRetriever
from quizgen.services.question_generator import QuestionGenerator
from quizgen.services.quiz_service import QuizService
from quizgen.storage import AttemptStore, QuizStore, create_stores

logger = logging.getLogger(__name__)


def create_app(
    llm: Optional[TextGenerator] = None,
    retriever: Optional[ContextRetriever] = None,
    quiz_store: Optional[QuizStore] = None,
    attempt_store: Optional[AttemptStore] = None,
) -> FastAPI:
    """
    Build the API. Collaborators not passed in are created from settings
    at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging(settings.ENVIRONMENT, settings.LOG_LEVEL, settings.LOG_DIR)
        logger.info(f"🚀 Starting {settings.APP_NAME}...")

        stores = (quiz_store, attempt_store)
        if quiz_store is None or attempt_store is None:
            stores = create_stores(settings)
        app.state.quiz_store = stores[0]

        context_retriever = retriever or ContextRetriever(settings)
        app.state.quiz_service = QuizService(
            retriever=context_retriever,
            generator=QuestionGenerator(llm or LLMClient(settings)),
            quiz_store=stores[0],
            attempt_store=stores[1],
        )

        yield
        # Shutdown
        logger.info(f"🛑 Shutting down {settings.APP_NAME}...")
        await context_retriever.aclose()
        for store in stores:
            await store.aclose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan
    )

    @app.exception_handler(QuizGenError)
    async def quizgen_error_handler(request: Request, exc: QuizGenError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"] if part != "body")
        message = f"{location} {first['msg']}" if location else first["msg"]
        return JSONResponse(status_code=400, content={"error": f"Invalid request: {message}"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    async def health_check(request: Request):
        storage = await request.app.state.quiz_store.health_check()
        return {"status": "ok", "version": __version__, "storage": storage}

    app.include_router(quizzes.router)
    return app


app = create_app()
