"""
Prompt assembly and the single generation call.
"""

import json
import logging
from typing import Optional, Tuple

from quizgen.core.constants import OPTION_COUNT, QUESTION_COUNT, get_option_labels
from quizgen.core.llm import TextGenerator
from quizgen.core.prompt_manager import PromptManager, get_prompt_manager

logger = logging.getLogger(__name__)


class QuestionGenerator:
    """
    Builds the system/user prompts for a topic and invokes the generator once.

    Upstream failures surface as RateLimited, QuotaExceeded or
    GenerationFailed, raised by the TextGenerator implementation.
    """

    def __init__(self, llm: TextGenerator, prompts: Optional[PromptManager] = None):
        self.llm = llm
        self.prompts = prompts or get_prompt_manager()

    def build_prompts(self, topic: str, context: Optional[str] = None) -> Tuple[str, str]:
        labels = get_option_labels()
        system_prompt = self.prompts.load_prompt(
            "quiz_system",
            QUESTION_COUNT=QUESTION_COUNT,
            OPTION_COUNT=OPTION_COUNT,
            OPTION_LABELS=", ".join(labels),
            QUESTION_IDS=", ".join(f"q{i}" for i in range(1, QUESTION_COUNT + 1)),
        )

        context_block = f"\n\nWikipedia context for reference:\n{context}" if context else ""
        user_prompt = self.prompts.load_prompt(
            "quiz_user",
            TOPIC=topic,
            TOPIC_JSON=json.dumps(topic),
            CONTEXT_BLOCK=context_block,
            QUESTION_COUNT=QUESTION_COUNT,
        )
        return system_prompt, user_prompt

    async def generate(self, topic: str, context: Optional[str] = None) -> str:
        """Return the raw generated text for topic."""
        system_prompt, user_prompt = self.build_prompts(topic, context)
        logger.info(
            f"Generating quiz for '{topic}' (context={'yes' if context else 'no'})",
            extra={"topic": topic, "stage": "generation"}
        )
        return await self.llm.generate(system_prompt, user_prompt)
