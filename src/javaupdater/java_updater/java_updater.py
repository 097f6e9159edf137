"""
Checks for a newer JDK build and installs it.
"""

import logging
import pathlib
from typing import Optional, Union

from javaupdater.archive_installer import ArchiveInstaller
from javaupdater.artifact_fetcher import ArtifactFetcher
from javaupdater.javaupdater_config import DEFAULT_PAGE_SIZE, DEFAULT_REQUEST_TIMEOUT, JavaUpdaterConfig, Vendor
from javaupdater.javaupdater_exceptions import (
    CatalogResponseError,
    HashVerificationError,
    UnsupportedVendorError,
)
from javaupdater.javaupdater_logger import JavaUpdaterLogger
from javaupdater.javaupdater_settings import JavaUpdaterSettings
from javaupdater.javaupdater_utils import FileUtils, Platform
from javaupdater.java_updater.install_target import InstallTarget
from javaupdater.release_catalog import AdoptiumCatalogClient, ReleaseCatalogClient
from javaupdater.release_catalog_models import (
    CatalogQuery,
    HeapSize,
    ProjectType,
    ReleaseDescriptor,
    ReleaseType,
    ReleaseVersion,
)
from javaupdater.version_marker import VersionMarker


class UpdateStatus:
    """Enumeration of update outcomes."""

    UPDATED = "updated"
    ALREADY_UP_TO_DATE = "already_up_to_date"
    NO_MATCHING_VERSION = "no_matching_version"


class UpdateResult:
    """
    Outcome of a single update check.
    """

    def __init__(
        self,
        status: str,
        java_version: str,
        java_vendor: str,
        install_dir: pathlib.Path,
        current_build_id: int,
        latest_build_id: Optional[int] = None,
    ):
        self.status = status
        self.java_version = java_version
        self.java_vendor = java_vendor
        self.install_dir = install_dir
        self.current_build_id = current_build_id
        self.latest_build_id = latest_build_id

    def is_updated(self) -> bool:
        return self.status == UpdateStatus.UPDATED

    def __repr__(self) -> str:
        return (
            f"UpdateResult(status={self.status}, java={self.java_version}/{self.java_vendor}, "
            f"build={self.current_build_id}->{self.latest_build_id}, path={self.install_dir})"
        )


class JavaUpdater:
    """
    Searches for JDK updates and installs them.

    The update runs strictly in order: read the installed build id, ask the
    catalog for the newest build of the requested major version, download it,
    verify its checksum and only then replace the installation and record the
    new build id. Nothing in the install directory changes unless the download
    was verified.

    Only one updater may work on an install directory at a time; concurrent
    runs against the same directory are not guarded against.
    """

    def __init__(
        self,
        platform: Platform,
        install_root: Union[str, pathlib.Path],
        logger: JavaUpdaterLogger,
        catalog_client: Optional[ReleaseCatalogClient] = None,
        artifact_fetcher: Optional[ArtifactFetcher] = None,
        archive_installer: Optional[ArchiveInstaller] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Creates the install directory for ``platform`` below ``install_root``.

        Args:
            platform: Platform the JDK is installed for
            install_root: Root directory for installations and the download cache
            logger: Logger for progress and error messages
            catalog_client: Release catalog, defaults to the Adoptium API
            artifact_fetcher: Downloader, defaults to an ArtifactFetcher
            archive_installer: Installer, defaults to an ArchiveInstaller
            request_timeout: Timeout in seconds for the default network clients
            page_size: Maximum number of release versions requested from the catalog
        """
        self.logger = logger
        self.target = InstallTarget.for_platform(platform, install_root)
        self.catalog_client = catalog_client or AdoptiumCatalogClient(logger, timeout=request_timeout)
        self.artifact_fetcher = artifact_fetcher or ArtifactFetcher(logger, timeout=request_timeout)
        self.archive_installer = archive_installer or ArchiveInstaller(logger)
        self.version_marker = VersionMarker(self.target.install_dir, logger)
        self.page_size = page_size

    @classmethod
    def from_config(cls, config: JavaUpdaterConfig, logger: JavaUpdaterLogger) -> "JavaUpdater":
        install_root = config.install_root or JavaUpdaterSettings.get_install_root()
        return cls(
            config.platform,
            install_root,
            logger,
            catalog_client=AdoptiumCatalogClient(
                logger, base_url=config.catalog_url, timeout=config.request_timeout
            ),
            request_timeout=config.request_timeout,
            page_size=config.page_size,
        )

    @property
    def install_dir(self) -> pathlib.Path:
        return self.target.install_dir

    def execute(self, java_version: str, java_vendor: str) -> UpdateResult:
        """
        Bring the JDK for ``java_version`` up to the latest build.

        Args:
            java_version: Major version, e.g. "17"
            java_vendor: Vendor identifier, only "adoptium" is supported

        Returns:
            UpdateResult describing what happened

        Raises:
            UnsupportedVendorError: Before any I/O if the vendor is not supported
            HashVerificationError: If the download does not match the published checksum
        """
        if not java_version:
            raise ValueError("java_version must not be empty")
        if not java_vendor:
            raise ValueError("java_vendor must not be empty")
        if java_vendor != Vendor.ADOPTIUM.value:
            raise UnsupportedVendorError(
                f"The provided Java vendor '{java_vendor}' is currently not supported!"
            )

        self.logger.log("Checking java installation...", logging.INFO)
        self.archive_installer.recover(self.install_dir)
        current_build_id = self.version_marker.get_build_id(java_version, java_vendor)

        query = CatalogQuery(
            os=self.target.os_type,
            architecture=self.target.architecture,
            image_type=self.target.image_type,
            heap_size=HeapSize.NORMAL,
            project=ProjectType.JDK,
            release_type=ReleaseType.GENERAL_AVAILABILITY,
            page_size=self.page_size,
        )
        latest = self.catalog_client.get_releases(query).find_latest(java_version)
        if latest is None:
            self.logger.log(
                f"Couldn't find a matching major version to '{java_version}'.",
                logging.ERROR,
            )
            return self._result(UpdateStatus.NO_MATCHING_VERSION, java_version, java_vendor, current_build_id)

        if latest.build <= current_build_id:
            self.logger.log("Your Java installation is on the latest version!", logging.INFO)
            return self._result(
                UpdateStatus.ALREADY_UP_TO_DATE, java_version, java_vendor, current_build_id, latest.build
            )

        release = self._resolve_release(latest, query)
        self.logger.log(f"Update found {current_build_id} -> {release.build_id}", logging.INFO)

        cache_path = self.target.downloads_dir / f"{self.target.image_type.value}-{release.semantic_version}.file"
        try:
            artifact = self.artifact_fetcher.fetch(release.download_url, cache_path, self.target.platform)

            self.logger.log("Java update downloaded. Checking hash...", logging.INFO)
            if not self.artifact_fetcher.compare_with_digest(release.checksum):
                raise HashVerificationError(
                    f"Hash of downloaded Java update is not valid! "
                    f"Expected {release.checksum} but got {artifact.actual_digest}"
                )

            self.logger.log("Hash is valid, replacing old installation...", logging.INFO)
            self.archive_installer.install(artifact, self.install_dir)
            self.version_marker.set_build_id(release.build_id, java_version, java_vendor)
        finally:
            FileUtils.remove_tree(self.target.downloads_dir)

        self.logger.log(
            f"Java update was installed successfully ({current_build_id} -> {release.build_id}) at {self.install_dir}",
            logging.INFO,
        )
        return self._result(UpdateStatus.UPDATED, java_version, java_vendor, current_build_id, release.build_id)

    def _resolve_release(self, latest: ReleaseVersion, query: CatalogQuery) -> ReleaseDescriptor:
        assets = self.catalog_client.get_version_information(latest.semver, query)
        if not assets or not assets[0].binaries:
            raise CatalogResponseError(f"No binaries published for Java {latest.semver}")

        asset = assets[0]
        download_url = self.catalog_client.get_download_url(asset.release_name, query)
        return ReleaseDescriptor(
            major_version=latest.major_version,
            build_id=latest.build,
            semantic_version=latest.semver,
            release_name=asset.release_name,
            checksum=asset.binaries[0].package.checksum,
            download_url=download_url,
        )

    def _result(
        self,
        status: str,
        java_version: str,
        java_vendor: str,
        current_build_id: int,
        latest_build_id: Optional[int] = None,
    ) -> UpdateResult:
        return UpdateResult(
            status=status,
            java_version=java_version,
            java_vendor=java_vendor,
            install_dir=self.install_dir,
            current_build_id=current_build_id,
            latest_build_id=latest_build_id,
        )
