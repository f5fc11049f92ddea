"""
Topic checks run before any network call: bounds validation, then the
content policy.
"""

import logging
from typing import Any

from quizgen.core.constants import BLOCKED_TOPIC_PATTERNS, MAX_TOPIC_LENGTH
from quizgen.core.exceptions import PolicyRejection, ValidationError

logger = logging.getLogger(__name__)


def validate_topic(raw: Any) -> str:
    """Trim the raw topic and bounds-check it. Returns the trimmed topic."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Topic is required and cannot be empty")

    topic = raw.strip()
    if len(topic) > MAX_TOPIC_LENGTH:
        raise ValidationError(f"Topic must be {MAX_TOPIC_LENGTH} characters or less")

    return topic


def is_topic_blocked(topic: str) -> bool:
    return any(pattern.search(topic) for pattern in BLOCKED_TOPIC_PATTERNS)


def check_topic_allowed(topic: str) -> None:
    """Raise PolicyRejection if any blocked pattern matches the topic."""
    if is_topic_blocked(topic):
        logger.warning("Topic rejected by content policy", extra={"topic": topic, "stage": "safety"})
        raise PolicyRejection("This topic is not allowed")
