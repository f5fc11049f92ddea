import logging
from typing import Optional, Protocol

import openai
from huggingface_hub import AsyncInferenceClient
from huggingface_hub.errors import HfHubHTTPError
from openai import AsyncOpenAI

from quizgen.core.config import Settings, settings
from quizgen.core.exceptions import GenerationFailed, QuotaExceeded, RateLimited

logger = logging.getLogger(__name__)

# Error codes some OpenAI-compatible gateways send with a 429 when billing is exhausted
QUOTA_ERROR_CODES = {"insufficient_quota", "billing_hard_limit_reached"}


class TextGenerator(Protocol):
    """Anything that turns a system + user prompt into generated text."""

    async def generate(self, system: str, user: str) -> str:
        ...


def raise_for_upstream_status(status: Optional[int], code: Optional[str] = None, detail: str = "") -> None:
    """Translate a failed upstream call into the matching pipeline error."""
    if code in QUOTA_ERROR_CODES or status == 402:
        raise QuotaExceeded("AI usage limit reached. Please try again later.")
    if status == 429:
        raise RateLimited("Rate limit exceeded. Please try again later.")
    message = f"Failed to generate quiz (upstream status {status})"
    if detail:
        message = f"{message}: {detail}"
    raise GenerationFailed(message)


class LLMClient:
    """
    Single-shot client for the remote generative-text service.

    Supports any OpenAI-compatible endpoint and the Hugging Face Inference
    API. No retries happen here; a failed call fails the request.
    """

    def __init__(self, config: Settings = settings):
        self.provider = config.LLM_PROVIDER
        self.temperature = config.LLM_TEMPERATURE
        self.max_tokens = config.LLM_MAX_TOKENS

        if self.provider == "huggingface":
            self.model = config.HF_MODEL_ID
            self.client = AsyncInferenceClient(
                model=config.HF_MODEL_ID,
                token=config.HUGGINGFACE_API_TOKEN,
                timeout=config.LLM_TIMEOUT
            )
            logger.info(f"🔹 LLM Client Initialized: Hugging Face ({self.model})")
        else:
            self.model = config.MODEL_NAME
            self.client = AsyncOpenAI(
                api_key=config.OPENAI_API_KEY or "dummy-key",
                base_url=config.OPENAI_BASE_URL,
                timeout=config.LLM_TIMEOUT,
                max_retries=0
            )
            logger.info(f"🔹 LLM Client Initialized: OpenAI Compatible ({self.model})")

    async def generate(self, system: str, user: str) -> str:
        if self.provider == "huggingface":
            content = await self._generate_hf(system, user)
        else:
            content = await self._generate_openai(system, user)

        if not content or not content.strip():
            logger.error(f"LLM returned no text (provider={self.provider})")
            raise GenerationFailed("No content in AI response")

        logger.debug(f"LLM returned {len(content)} chars")
        return content

    async def _generate_openai(self, system: str, user: str) -> Optional[str]:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user}
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )
        except openai.APIStatusError as e:
            logger.error(f"❌ LLM Error: status={e.status_code} code={e.code}")
            raise_for_upstream_status(e.status_code, e.code, e.message)
        except openai.APIError as e:
            # Connection failures and timeouts
            logger.error(f"❌ LLM transport error: {e}")
            raise GenerationFailed(f"Failed to reach generation service: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def _generate_hf(self, system: str, user: str) -> Optional[str]:
        try:
            response = await self.client.chat_completion(
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user}
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )
        except HfHubHTTPError as e:
            status = getattr(e.response, "status_code", None)
            logger.error(f"❌ LLM Error: status={status}")
            raise_for_upstream_status(status, None, str(e))
        except Exception as e:
            logger.error(f"❌ LLM transport error: {e}")
            raise GenerationFailed(f"Failed to reach generation service: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content
