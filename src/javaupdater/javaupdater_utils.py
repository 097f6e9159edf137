"""
This file contains various utility functions like filesystem helpers and platform detection
"""

import os
import platform
import shutil
import tempfile
import pathlib
from enum import Enum
from typing import Union

from javaupdater.javaupdater_exceptions import UpdaterFilesystemError


class Platform(str, Enum):
    """
    Operating system families a JDK can be installed for
    """

    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"

    def is_windows(self) -> bool:
        return self == Platform.WINDOWS


class PlatformUtils:
    """
    This class provides utilities for platform detection and identification.
    """

    @staticmethod
    def get_platform() -> Platform:
        """
        Returns the platform family of the running interpreter
        """
        system = platform.system()
        if system == "Windows":
            return Platform.WINDOWS
        if system == "Darwin":
            return Platform.MAC
        if system == "Linux":
            return Platform.LINUX
        raise NotImplementedError(f"Unknown platform: {system}")


class FileUtils:
    """
    Utility functions for files and directories
    """

    @staticmethod
    def atomic_write_text(path: Union[str, pathlib.Path], text: str) -> None:
        """
        Writes text to a temporary sibling of path and renames it over path, so readers
        only ever see the old or the new content.
        """
        path = pathlib.Path(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(text)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.remove(tmp_name)
            except FileNotFoundError:
                pass
            raise UpdaterFilesystemError(f"Failed to write {path}: {e}") from e

    @staticmethod
    def remove_tree(path: Union[str, pathlib.Path]) -> None:
        """
        Removes a directory tree, tolerating an already missing path
        """
        path = pathlib.Path(path)
        if not os.path.lexists(path):
            return
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to remove {path}: {e}") from e
