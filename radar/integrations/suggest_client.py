"""Search-suggest HTTP client used for autocomplete discovery."""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

logger = logging.getLogger(__name__)

SUGGEST_API_URL = "https://suggestqueries.google.com/complete/search"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ATXApps/1.0)"


class SuggestClient:
    """Thin async client for a Firefox-style suggest endpoint.

    The endpoint answers ``[query, [suggestion, ...]]``. Any transport
    error, non-200 status, or malformed payload degrades to an empty list
    so one bad query never aborts a discovery batch.

    Usage::

        client = SuggestClient()
        suggestions = await client.fetch("austin tacos near me")
        await client.close()
    """

    def __init__(
        self,
        url: str = SUGGEST_API_URL,
        locale: str = "en",
        country: str = "us",
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._url = url
        self._locale = locale
        self._country = country
        self._timeout = timeout
        self._user_agent = user_agent
        self.session: Optional[aiohttp.ClientSession] = None
        self.failures = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"User-Agent": self._user_agent},
            )
        return self.session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def __aenter__(self) -> "SuggestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch(self, query: str) -> list[str]:
        """Return the provider's suggestions for ``query`` (possibly empty)."""
        params = {"client": "firefox", "q": query, "hl": self._locale, "gl": self._country}
        session = await self._get_session()
        try:
            async with session.get(self._url, params=params) as response:
                if response.status != 200:
                    self.failures += 1
                    logger.warning("Suggest request for %r failed: HTTP %d", query, response.status)
                    return []
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            self.failures += 1
            logger.warning("Suggest request for %r failed: %s", query, exc)
            return []

        suggestions = self.parse_payload(payload)
        logger.debug("Suggest %r -> %d suggestions", query, len(suggestions))
        return suggestions

    @staticmethod
    def parse_payload(payload: Any) -> list[str]:
        """Extract suggestion strings from ``[query, [suggestions...]]``."""
        if not isinstance(payload, list) or len(payload) < 2 or not isinstance(payload[1], list):
            return []
        return [item for item in payload[1] if isinstance(item, str)]
