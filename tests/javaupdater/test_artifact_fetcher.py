"""
Tests for the artifact fetcher.
"""

import hashlib

import pytest
import requests

from javaupdater.artifact_fetcher import ArtifactFetcher
from javaupdater.javaupdater_exceptions import JavaUpdaterException, NetworkError
from javaupdater.javaupdater_utils import Platform
from tests.test_utils import FakeResponse, FakeSession

URL = "https://api.adoptium.test/v3/binary/version/jdk-17/linux/x64/jdk/hotspot/normal/eclipse"
PAYLOAD = b"jdk-archive-bytes" * 1000


class TestArtifactFetcher:
    def test_fetch_streams_to_disk_and_hashes(self, tmp_path, logger):
        session = FakeSession({URL: FakeResponse(content=PAYLOAD)})
        fetcher = ArtifactFetcher(logger, timeout=7, session=session, chunk_size=1024)
        dest = tmp_path / "downloads" / "jdk-17.0.1+12.file"

        artifact = fetcher.fetch(URL, dest, Platform.LINUX)

        assert dest.read_bytes() == PAYLOAD
        assert artifact.cache_path == dest
        assert artifact.actual_digest == hashlib.sha256(PAYLOAD).hexdigest()
        assert session.requests[0]["stream"] is True
        assert session.requests[0]["timeout"] == 7

    def test_fetch_overwrites_existing_file(self, tmp_path, logger):
        dest = tmp_path / "jdk.file"
        dest.write_bytes(b"stale content that is longer than the payload" * 1000)
        fetcher = ArtifactFetcher(logger, session=FakeSession({URL: FakeResponse(content=b"new")}))

        fetcher.fetch(URL, dest, Platform.LINUX)

        assert dest.read_bytes() == b"new"

    def test_compare_with_digest_is_case_insensitive(self, tmp_path, logger):
        fetcher = ArtifactFetcher(logger, session=FakeSession({URL: FakeResponse(content=PAYLOAD)}))
        fetcher.fetch(URL, tmp_path / "jdk.file", Platform.LINUX)
        expected = hashlib.sha256(PAYLOAD).hexdigest()

        assert fetcher.compare_with_digest(expected.upper())
        assert fetcher.compare_with_digest(f" {expected}\n")
        assert not fetcher.compare_with_digest("0" * 64)

    def test_compare_before_fetch_raises(self, logger):
        fetcher = ArtifactFetcher(logger, session=FakeSession())

        with pytest.raises(JavaUpdaterException):
            fetcher.compare_with_digest("abc")

    @pytest.mark.parametrize(
        "headers,final_url,platform,expected_tar",
        [
            ({"Content-Disposition": 'attachment; filename="OpenJDK17U-jdk_x64_linux.tar.gz"'}, "", Platform.WINDOWS, True),
            ({}, "https://github.test/OpenJDK17U-jdk_x64_windows.zip", Platform.LINUX, False),
            ({}, "https://github.test/OpenJDK17U-jdk_x64_mac.tar.gz", Platform.WINDOWS, True),
            ({"Content-Type": "application/zip"}, "", Platform.LINUX, False),
            ({"Content-Type": "application/x-gzip; charset=binary"}, "", Platform.WINDOWS, True),
            ({}, "", Platform.WINDOWS, False),
            ({}, "", Platform.MAC, True),
        ],
    )
    def test_archive_kind_detection(self, tmp_path, logger, headers, final_url, platform, expected_tar):
        response = FakeResponse(content=b"x", headers=headers, url=final_url)
        fetcher = ArtifactFetcher(logger, session=FakeSession({URL: response}))

        artifact = fetcher.fetch(URL, tmp_path / "jdk.file", platform)

        assert artifact.is_tar is expected_tar

    def test_network_failure_raises_network_error(self, tmp_path, logger):
        session = FakeSession({URL: requests.Timeout("timed out")})
        fetcher = ArtifactFetcher(logger, session=session)

        with pytest.raises(NetworkError):
            fetcher.fetch(URL, tmp_path / "jdk.file", Platform.LINUX)

    def test_http_error_raises_network_error(self, tmp_path, logger):
        fetcher = ArtifactFetcher(logger, session=FakeSession({URL: FakeResponse(status_code=404)}))

        with pytest.raises(NetworkError):
            fetcher.fetch(URL, tmp_path / "jdk.file", Platform.LINUX)
