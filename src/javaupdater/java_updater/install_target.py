"""
Where a JDK for a platform is installed and cached.
"""

import dataclasses
import pathlib
from typing import Union

from javaupdater.javaupdater_exceptions import UpdaterFilesystemError
from javaupdater.javaupdater_utils import Platform
from javaupdater.release_catalog_models import ArchitectureType, ImageType, OperatingSystemType

_PLATFORM_DIRECTORIES = {
    Platform.LINUX: "linux",
    Platform.MAC: "mac",
    Platform.WINDOWS: "win",
}


@dataclasses.dataclass(frozen=True)
class InstallTarget:
    """
    Stores the install and cache locations of the JDK for one platform
    """

    platform: Platform
    install_dir: pathlib.Path
    downloads_dir: pathlib.Path
    os_type: OperatingSystemType
    architecture: ArchitectureType = ArchitectureType.X64
    image_type: ImageType = ImageType.JDK

    @classmethod
    def for_platform(cls, platform: Platform, install_root: Union[str, pathlib.Path]) -> "InstallTarget":
        """
        Lays out ``<root>/jdk/<platform>`` and ``<root>/downloads`` and creates the
        install directory if it is missing.
        """
        root = pathlib.Path(install_root)
        target = cls(
            platform=platform,
            install_dir=root / "jdk" / _PLATFORM_DIRECTORIES[platform],
            downloads_dir=root / "downloads",
            os_type=OperatingSystemType.for_platform(platform),
        )
        try:
            target.install_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to create install directory {target.install_dir}: {e}") from e
        return target
