"""HTTP clients for iqdb.org service discovery and image search."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import TYPE_CHECKING

import httpx
from loguru import logger

from iqdb.dom import parse_document
from iqdb.errors import TransportError
from iqdb.models import Match, Service
from iqdb.parsers import parse_matches, parse_services

if TYPE_CHECKING:
    from iqdb.config.schema import Config

DEFAULT_BASE_URL = "https://iqdb.org"
BASE_URL_ENV = "IQDB_BASE_URL"


def build_search_form(image_url: str, services: Sequence[Service]) -> dict[str, str | list[str]]:
    """Build the search form body: ``url`` then one ``service[]`` per service."""
    if not image_url:
        raise ValueError("image_url must not be empty")
    return {
        "url": image_url,
        "service[]": [str(service.value) for service in services],
    }


class _BaseIqdbClient:
    def __init__(self, config: "Config | None" = None):
        from iqdb.config.schema import Config

        self.config = config or Config()

    @property
    def base_url(self) -> str:
        return self.config.base_url or os.environ.get(BASE_URL_ENV, "") or DEFAULT_BASE_URL

    def _client_options(self) -> dict:
        return {
            "headers": {"User-Agent": self.config.http.user_agent},
            "timeout": self.config.http.timeout,
            "follow_redirects": True,
        }


class IqdbClient(_BaseIqdbClient):
    """Blocking client: one GET for the service list, one POST per search."""

    def fetch_service_page(self) -> str:
        """Fetch the front page holding the service-selection form."""
        logger.debug("Fetching service page from {}", self.base_url)
        try:
            with httpx.Client(**self._client_options()) as client:
                response = client.get(self.base_url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to fetch {self.base_url}: {e}") from e
        return response.text

    def submit_search(self, image_url: str, services: Sequence[Service]) -> str:
        """Post an image URL against ``services`` and return the results page."""
        form = build_search_form(image_url, services)
        logger.debug("Searching {} across {} services", image_url, len(services))
        try:
            with httpx.Client(**self._client_options()) as client:
                response = client.post(self.base_url, data=form)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"search request to {self.base_url} failed: {e}") from e
        return response.text

    def discover_services(self) -> list[Service]:
        """Return the services iqdb currently offers."""
        return parse_services(parse_document(self.fetch_service_page()))

    def search(self, image_url: str, services: Sequence[Service]) -> list[Match]:
        """Search ``image_url`` in ``services`` and return the matches found."""
        return parse_matches(parse_document(self.submit_search(image_url, services)))


class AsyncIqdbClient(_BaseIqdbClient):
    """Async variant of :class:`IqdbClient` built on ``httpx.AsyncClient``."""

    async def fetch_service_page(self) -> str:
        logger.debug("Fetching service page from {}", self.base_url)
        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.get(self.base_url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to fetch {self.base_url}: {e}") from e
        return response.text

    async def submit_search(self, image_url: str, services: Sequence[Service]) -> str:
        form = build_search_form(image_url, services)
        logger.debug("Searching {} across {} services", image_url, len(services))
        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.post(self.base_url, data=form)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"search request to {self.base_url} failed: {e}") from e
        return response.text

    async def discover_services(self) -> list[Service]:
        return parse_services(parse_document(await self.fetch_service_page()))

    async def search(self, image_url: str, services: Sequence[Service]) -> list[Match]:
        return parse_matches(parse_document(await self.submit_search(image_url, services)))
