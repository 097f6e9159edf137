"""
Build marker persistence.

Keeps the build id of the installed JDK for every (major version, vendor) key
in one JSON file inside the install directory.
"""

import json
import logging
import pathlib
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from javaupdater.javaupdater_exceptions import UpdaterFilesystemError
from javaupdater.javaupdater_logger import JavaUpdaterLogger
from javaupdater.javaupdater_utils import FileUtils

MARKER_FILE_NAME = ".javaupdater_build_markers.json"


class BuildMarker(BaseModel):
    """The installed build id for one (major version, vendor) key."""

    major_version: str
    vendor: str
    build_id: int = Field(0, ge=0)

    def matches(self, major_version: str, vendor: str) -> bool:
        return self.major_version == major_version and self.vendor == vendor


class BuildMarkerFile(BaseModel):
    """On-disk layout of the marker file."""

    markers: List[BuildMarker] = Field(default_factory=list)


class VersionMarker:
    """
    Reads and writes build markers.

    Every write replaces the whole marker file atomically, so a failed write
    leaves the previous markers in place and there is never more than one
    record per key.
    """

    def __init__(self, install_dir: Union[str, pathlib.Path], logger: JavaUpdaterLogger):
        self.install_dir = pathlib.Path(install_dir)
        self.logger = logger

    @property
    def marker_path(self) -> pathlib.Path:
        return self.install_dir / MARKER_FILE_NAME

    def get_build_id(self, major_version: str, vendor: str) -> int:
        """
        Return the installed build id for the key, recording 0 when no marker exists yet.
        """
        marker = self._find(self._load(), major_version, vendor)
        if marker is not None:
            return marker.build_id

        self.logger.log(
            f"No build marker for Java {major_version} ({vendor}), assuming build 0",
            logging.DEBUG,
        )
        self.set_build_id(0, major_version, vendor)
        return 0

    def set_build_id(self, build_id: int, major_version: str, vendor: str) -> None:
        """
        Record ``build_id`` for the key, replacing any previous record for it.
        """
        if build_id < 0:
            raise ValueError(f"Build id must not be negative: {build_id}")

        marker_file = self._load()
        markers = [m for m in marker_file.markers if not m.matches(major_version, vendor)]
        markers.append(BuildMarker(major_version=major_version, vendor=vendor, build_id=build_id))

        if not self.install_dir.is_dir():
            raise UpdaterFilesystemError(f"Install directory does not exist: {self.install_dir}")
        FileUtils.atomic_write_text(
            self.marker_path,
            BuildMarkerFile(markers=markers).model_dump_json(indent=2),
        )
        self.logger.log(
            f"Recorded build {build_id} for Java {major_version} ({vendor})",
            logging.DEBUG,
        )

    def get_markers(self) -> List[BuildMarker]:
        """Return every stored marker."""
        return list(self._load().markers)

    def _load(self) -> BuildMarkerFile:
        try:
            text = self.marker_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return BuildMarkerFile()
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to read build marker {self.marker_path}: {e}") from e

        try:
            return BuildMarkerFile(**json.loads(text))
        except (ValueError, TypeError, ValidationError) as e:
            raise UpdaterFilesystemError(f"Build marker {self.marker_path} is corrupt: {e}") from e

    @staticmethod
    def _find(marker_file: BuildMarkerFile, major_version: str, vendor: str) -> Optional[BuildMarker]:
        for marker in marker_file.markers:
            if marker.matches(major_version, vendor):
                return marker
        return None
