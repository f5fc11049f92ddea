# parsers.py
"""
Output parser for generated quiz text.

The model is asked for raw JSON but often wraps it in a markdown code fence.
Fence removal lives in `strip_code_fences` so the rule can be changed
without touching schema validation.
"""

import json
import logging
import re
from typing import Any

from langchain_core.output_parsers import BaseOutputParser

from quizgen.core.exceptions import MalformedResponse

logger = logging.getLogger(__name__)

# ``` or ```json (any language tag) at the very start
_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
# ``` at the very end, with the newline before it
_CLOSING_FENCE = re.compile(r"\r?\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove one wrapping markdown code fence from the start and end of text."""
    text = text.strip()
    if text.startswith("\ufeff"):
        text = text[1:].lstrip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


class QuizOutputParser(BaseOutputParser[Any]):
    """
    Parser for quiz generation responses.

    Strips code fences and decodes JSON. No other repair is attempted:
    anything that is not valid JSON after fence removal is rejected.
    """

    def parse(self, text: str) -> Any:
        """Parse LLM output into an untyped JSON value."""
        json_str = strip_code_fences(text or "")
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.error(f"JSON parse error: {e}")
            logger.debug(f"Failed text: {(text or '')[:300]}")
            raise MalformedResponse("Invalid quiz format from AI", raw_text=text) from e

        logger.debug(f"✅ Parsed quiz JSON ({len(json_str)} chars)")
        return data

    @property
    def _type(self) -> str:
        return "quiz_json"


def parse_quiz_response(text: str) -> Any:
    """Parse quiz JSON from LLM output."""
    return QuizOutputParser().parse(text)
