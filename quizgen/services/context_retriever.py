"""
Best-effort encyclopedia context for a topic.

Fetches the Wikipedia REST summary for the topic. Every failure mode
(transport error, timeout, non-2xx status, missing `extract`) degrades to
no context; this stage never fails the pipeline.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from quizgen.core.config import Settings, settings

logger = logging.getLogger(__name__)


class ContextRetriever:
    def __init__(self, config: Settings = settings, client: Optional[httpx.AsyncClient] = None):
        self.enabled = config.CONTEXT_ENABLED
        self.base_url = config.WIKIPEDIA_SUMMARY_URL
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.CONTEXT_TIMEOUT),
            headers={"User-Agent": config.CONTEXT_USER_AGENT},
            follow_redirects=True,
        )

    def summary_url(self, topic: str) -> str:
        return f"{self.base_url}{quote(topic, safe='')}"

    async def fetch_summary(self, topic: str) -> Optional[str]:
        """Return the summary text for topic, or None if none could be fetched."""
        if not self.enabled:
            return None

        url = self.summary_url(topic)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Context fetch failed for '{topic}': {e}", extra={"stage": "context"})
            return None

        if not response.is_success:
            logger.info(f"No context for '{topic}' (status {response.status_code})", extra={"stage": "context"})
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Context response for '{topic}' is not JSON", extra={"stage": "context"})
            return None

        extract = data.get("extract") if isinstance(data, dict) else None
        if not isinstance(extract, str) or not extract.strip():
            logger.info(f"No summary extract for '{topic}'", extra={"stage": "context"})
            return None

        logger.info(f"📚 Context: retrieved {len(extract)} chars for '{topic}'", extra={"stage": "context"})
        return extract.strip()

    async def aclose(self) -> None:
        await self._client.aclose()
