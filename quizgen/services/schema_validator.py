"""Trust boundary between generated output and the rest of the pipeline."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quizgen.core.exceptions import SchemaViolation
from quizgen.schemas.quiz import GeneratedQuiz

logger = logging.getLogger(__name__)


def describe_first_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"


def validate_quiz_payload(payload: Any) -> GeneratedQuiz:
    """Validate the parsed payload against the quiz contract."""
    try:
        return GeneratedQuiz.model_validate(payload)
    except PydanticValidationError as e:
        violation = describe_first_error(e)
        logger.error(f"Generated quiz failed schema validation: {violation}", extra={"stage": "schema"})
        raise SchemaViolation(f"Invalid quiz structure from AI ({violation})") from e
