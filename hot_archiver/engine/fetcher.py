"""HTTP fetching for the hot board page."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from ..config import CrawlerConfig


class FetchError(RuntimeError):
    """Raised when the board page cannot be retrieved."""


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    status_code: int
    text: str


class Fetcher:
    """Issue a single GET per call; failures are not retried."""

    def __init__(self, config: CrawlerConfig, logger: structlog.BoundLogger | None = None) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("hot_archiver.fetcher")
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
        )

    def close(self) -> None:
        self._client.close()

    def fetch(self, url: str | None = None) -> FetchResponse:
        target = url or self.config.target_url
        try:
            response = self._client.request(method="GET", url=target)
        except httpx.HTTPError as exc:
            self.logger.warning("fetch_error", url=target, error=str(exc))
            raise FetchError(f"Request failed: {target}") from exc
        if response.status_code != httpx.codes.OK:
            self.logger.warning("fetch_bad_status", url=target, status=response.status_code)
            raise FetchError(f"Unexpected status {response.status_code}: {target}")
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            text=response.text,
        )


__all__ = ["FetchError", "FetchResponse", "Fetcher"]
