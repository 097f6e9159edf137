"""
Client for the Adoptium v3 release catalog.
"""

import logging
from typing import Any, List, Optional, Protocol
from urllib.parse import quote

import requests
from pydantic import ValidationError

from javaupdater.javaupdater_config import ADOPTIUM_API_URL, DEFAULT_REQUEST_TIMEOUT
from javaupdater.javaupdater_exceptions import CatalogResponseError, NetworkError
from javaupdater.javaupdater_logger import JavaUpdaterLogger
from javaupdater.release_catalog_models import (
    CatalogQuery,
    ReleaseAsset,
    ReleaseVersionsResponse,
)


class ReleaseCatalogClient(Protocol):
    """Protocol describing a release catalog the updater can query."""

    def get_releases(self, query: CatalogQuery) -> ReleaseVersionsResponse:
        """Return the release versions matching ``query``."""

    def get_version_information(self, version: str, query: CatalogQuery) -> List[ReleaseAsset]:
        """Return binary level details for the exact semantic ``version``."""

    def get_download_url(self, release_name: str, query: CatalogQuery) -> str:
        """Return a direct download URL for ``release_name``."""


class AdoptiumCatalogClient:
    """
    Queries https://api.adoptium.net for JDK releases.

    Each method maps to one endpoint of the v3 API. Transport failures and HTTP
    error statuses are raised as NetworkError, payloads that do not match the
    expected shape as CatalogResponseError.
    """

    def __init__(
        self,
        logger: JavaUpdaterLogger,
        base_url: str = ADOPTIUM_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the catalog client.

        Args:
            logger: Logger for request tracing
            base_url: Root URL of the Adoptium API
            timeout: Timeout in seconds applied to every request
            session: Optional requests session, created on demand when omitted
        """
        self.logger = logger
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_releases(self, query: CatalogQuery) -> ReleaseVersionsResponse:
        payload = self._get_json(f"{self.base_url}/v3/info/release_versions", query)
        try:
            return ReleaseVersionsResponse(**payload)
        except (TypeError, ValidationError) as e:
            raise CatalogResponseError(f"Unexpected release versions payload: {e}") from e

    def get_version_information(self, version: str, query: CatalogQuery) -> List[ReleaseAsset]:
        url = f"{self.base_url}/v3/assets/version/{quote(version, safe='')}"
        payload = self._get_json(url, query)
        if not isinstance(payload, list):
            raise CatalogResponseError(f"Expected a list of assets for version {version}")
        try:
            return [ReleaseAsset(**item) for item in payload]
        except (TypeError, ValidationError) as e:
            raise CatalogResponseError(f"Unexpected asset payload for version {version}: {e}") from e

    def get_download_url(self, release_name: str, query: CatalogQuery) -> str:
        """
        Builds the binary endpoint URL for the release. The endpoint answers with a
        redirect to the actual package, which requests follows when downloading.
        """
        path = "/".join(
            [
                "v3",
                "binary",
                "version",
                quote(release_name, safe=""),
                query.os.value,
                query.architecture.value,
                query.image_type.value,
                query.jvm_impl,
                query.heap_size.value,
                query.vendor,
            ]
        )
        return f"{self.base_url}/{path}?project={query.project.value}"

    def _get_json(self, url: str, query: CatalogQuery) -> Any:
        self.logger.log(f"Querying release catalog {url}", logging.DEBUG)
        try:
            response = self.session.get(url, params=query.to_params(), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Release catalog request to {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise CatalogResponseError(f"Release catalog at {url} did not return JSON: {e}") from e
