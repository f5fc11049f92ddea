"""
Centralized constants and enums for QuizGen.

Single source of truth for the quiz shape and the topic policy.
"""

import re
from enum import Enum
from typing import List, Pattern


# ============================================================================
# Quiz Shape
# ============================================================================

class OptionLabel(str, Enum):
    """Fixed answer labels of every question."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"


def get_option_labels() -> List[str]:
    """Get all option label values, in display order."""
    return [label.value for label in OptionLabel]


QUESTION_COUNT = 5
OPTION_COUNT = len(OptionLabel)

MAX_TOPIC_LENGTH = 100


# ============================================================================
# Topic Policy
# ============================================================================

# One pattern per category: sexual content, violence/self-harm,
# hate speech/genocide denial, racial slurs.
BLOCKED_TOPIC_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\b(porn|sex|nude|nsfw|xxx)\b", re.IGNORECASE),
    re.compile(r"\b(kill|murder|suicide|self.?harm)\b", re.IGNORECASE),
    re.compile(r"\b(hitler|nazi|holocaust.?denial)\b", re.IGNORECASE),
    re.compile(r"\b(racist|racial.?slur|hate.?speech)\b", re.IGNORECASE),
]
