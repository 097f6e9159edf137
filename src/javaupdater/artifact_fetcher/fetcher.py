"""
Artifact fetcher implementation.

Streams release archives to the download cache and hashes them on the way.
"""

import dataclasses
import hashlib
import logging
import pathlib
import re
from typing import Optional, Union
from urllib.parse import urlparse

import requests

from javaupdater.javaupdater_config import DEFAULT_REQUEST_TIMEOUT
from javaupdater.javaupdater_exceptions import (
    JavaUpdaterException,
    NetworkError,
    UpdaterFilesystemError,
)
from javaupdater.javaupdater_logger import JavaUpdaterLogger
from javaupdater.javaupdater_utils import Platform

CHUNK_SIZE = 1024 * 1024

TAR_SUFFIXES = (".tar.gz", ".tgz")
ZIP_SUFFIXES = (".zip",)
TAR_CONTENT_TYPES = ("application/gzip", "application/x-gzip", "application/x-tar", "application/x-gtar")
ZIP_CONTENT_TYPES = ("application/zip", "application/x-zip-compressed")

_FILENAME_PATTERN = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class DownloadedArtifact:
    """
    A downloaded archive together with the digest computed while streaming it
    """

    cache_path: pathlib.Path
    is_tar: bool
    actual_digest: str

    def matches_digest(self, expected_hex: str) -> bool:
        return self.actual_digest.lower() == expected_hex.strip().lower()


class ArtifactFetcher:
    """
    Downloads binary artifacts into the local cache.
    """

    def __init__(
        self,
        logger: JavaUpdaterLogger,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
        chunk_size: int = CHUNK_SIZE,
    ):
        self.logger = logger
        self.timeout = timeout
        self.session = session or requests.Session()
        self.chunk_size = chunk_size
        self.artifact: Optional[DownloadedArtifact] = None

    def fetch(
        self,
        url: str,
        dest_path: Union[str, pathlib.Path],
        target_os: Platform,
    ) -> DownloadedArtifact:
        """
        Download ``url`` to ``dest_path``, overwriting it.

        Args:
            url: URL of the artifact
            dest_path: File the artifact is written to
            target_os: Platform the artifact was built for, used when the response
                does not reveal the archive format

        Returns:
            DownloadedArtifact describing the written file
        """
        dest_path = pathlib.Path(dest_path)
        self.artifact = None
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to create download directory {dest_path.parent}: {e}") from e

        self.logger.log(f"Downloading {url} to {dest_path}", logging.INFO)
        digest = hashlib.sha256()
        size = 0
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                is_tar = self._detect_tar(response, url, target_os)
                with dest_path.open("wb") as destination:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if not chunk:
                            continue
                        digest.update(chunk)
                        destination.write(chunk)
                        size += len(chunk)
        except requests.RequestException as e:
            raise NetworkError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to write {dest_path}: {e}") from e

        self.artifact = DownloadedArtifact(
            cache_path=dest_path,
            is_tar=is_tar,
            actual_digest=digest.hexdigest(),
        )
        self.logger.log(
            f"Downloaded {size} bytes ({'tar.gz' if is_tar else 'zip'}) with sha256 {self.artifact.actual_digest}",
            logging.DEBUG,
        )
        return self.artifact

    def compare_with_digest(self, expected_hex: str) -> bool:
        """
        Returns True iff the last fetched artifact has the expected digest (case-insensitive)
        """
        if self.artifact is None:
            raise JavaUpdaterException("No artifact has been fetched yet")
        return self.artifact.matches_digest(expected_hex)

    def _detect_tar(self, response: requests.Response, url: str, target_os: Platform) -> bool:
        names = []
        disposition = response.headers.get("Content-Disposition", "")
        match = _FILENAME_PATTERN.search(disposition)
        if match:
            names.append(match.group(1))
        names.append(urlparse(response.url or url).path)

        for name in names:
            lowered = name.lower()
            if lowered.endswith(TAR_SUFFIXES):
                return True
            if lowered.endswith(ZIP_SUFFIXES):
                return False

        content_type = response.headers.get("Content-Type", "").split(";")[0].strip().lower()
        if content_type in TAR_CONTENT_TYPES:
            return True
        if content_type in ZIP_CONTENT_TYPES:
            return False

        # Adoptium ships zip archives for Windows and tar.gz everywhere else
        return not target_os.is_windows()
