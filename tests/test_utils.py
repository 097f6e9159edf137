"""
Shared fakes and archive builders for the javaupdater tests.
"""

import hashlib
import io
import pathlib
import tarfile
import zipfile
from typing import Dict, List, Optional, Tuple

import requests

from javaupdater.release_catalog_models import (
    CatalogQuery,
    ReleaseAsset,
    ReleaseVersionsResponse,
)

DEFAULT_JDK_FILES = {
    "bin/java": b"#!/bin/sh\necho java\n",
    "lib/modules": b"modules",
    "release": b'JAVA_VERSION="17.0.1"\n',
}


def build_jdk_archive(
    directory: pathlib.Path,
    wrapper: Optional[str] = "jdk-17.0.1+12",
    files: Optional[Dict[str, bytes]] = None,
    is_tar: bool = True,
) -> Tuple[bytes, str]:
    """
    Build an in-memory JDK archive whose entries live under ``wrapper``.

    Returns:
        Tuple of (archive bytes, sha256 hex digest)
    """
    entries = files if files is not None else DEFAULT_JDK_FILES
    buffer = io.BytesIO()
    if is_tar:
        with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
            for relative, content in entries.items():
                name = f"{wrapper}/{relative}" if wrapper else relative
                info = tarfile.TarInfo(name)
                info.size = len(content)
                info.mode = 0o755 if relative.startswith("bin/") else 0o644
                archive.addfile(info, io.BytesIO(content))
    else:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for relative, content in entries.items():
                name = f"{wrapper}/{relative}" if wrapper else relative
                archive.writestr(name, content)
    data = buffer.getvalue()
    return data, hashlib.sha256(data).hexdigest()


def write_archive(path: pathlib.Path, data: bytes) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def snapshot_tree(root: pathlib.Path) -> Dict[str, bytes]:
    """Map every file below ``root`` to its content."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


class FakeResponse:
    def __init__(
        self,
        content: bytes = b"",
        json_data=None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        url: str = "",
    ):
        self.content = content
        self._json = json_data
        self.status_code = status_code
        self.headers = headers or {}
        self.url = url

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeSession:
    """Serves canned responses keyed by URL and records every request."""

    def __init__(self, routes: Optional[Dict[str, object]] = None):
        self.routes = routes or {}
        self.requests: List[dict] = []

    def get(self, url, params=None, timeout=None, stream=False):
        self.requests.append({"url": url, "params": params, "timeout": timeout, "stream": stream})
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        if route.url == "":
            route.url = url
        return route


class FakeCatalogClient:
    """An in-memory release catalog recording how it was queried."""

    def __init__(
        self,
        versions: Optional[List[dict]] = None,
        checksum: str = "",
        release_name: str = "jdk-17.0.1+12",
        download_url: str = "https://example.test/jdk-17.tar.gz",
    ):
        self.versions = versions or []
        self.checksum = checksum
        self.release_name = release_name
        self.download_url = download_url
        self.calls: List[Tuple[str, object]] = []

    def get_releases(self, query: CatalogQuery) -> ReleaseVersionsResponse:
        self.calls.append(("get_releases", query))
        return ReleaseVersionsResponse(versions=self.versions)

    def get_version_information(self, version: str, query: CatalogQuery) -> List[ReleaseAsset]:
        self.calls.append(("get_version_information", version))
        return [
            ReleaseAsset(
                release_name=self.release_name,
                binaries=[{"package": {"checksum": self.checksum, "name": "jdk.tar.gz"}}],
            )
        ]

    def get_download_url(self, release_name: str, query: CatalogQuery) -> str:
        self.calls.append(("get_download_url", release_name))
        return self.download_url


class RecordingFetcher:
    """Stands in for ArtifactFetcher and fails the test if it is ever used."""

    def __init__(self):
        self.calls = []

    def fetch(self, url, dest_path, target_os):
        self.calls.append(("fetch", url))
        raise AssertionError("fetch should not have been called")

    def compare_with_digest(self, expected_hex):
        self.calls.append(("compare_with_digest", expected_hex))
        raise AssertionError("compare_with_digest should not have been called")


class RecordingInstaller:
    """Stands in for ArchiveInstaller and records install attempts."""

    def __init__(self):
        self.installed = []
        self.recovered = []

    def install(self, artifact, install_dir):
        self.installed.append((artifact, install_dir))
        raise AssertionError("install should not have been called")

    def recover(self, install_dir):
        self.recovered.append(install_dir)


def release_version(major: int, build: int, semver: Optional[str] = None) -> dict:
    return {
        "major": major,
        "minor": 0,
        "security": 1,
        "build": build,
        "semver": semver or f"{major}.0.1+{build}",
        "openjdk_version": f"{major}.0.1+{build}",
    }
