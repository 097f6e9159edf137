"""
Defines the default directory layout used when no install root is configured.
"""

import os
import pathlib
import tempfile
from pathlib import PurePath


class JavaUpdaterSettings:
    """
    Provides the conventional locations for the updater's working directories.
    """

    @staticmethod
    def get_user_temp_folder() -> str:
        """
        Returns the per-user folder under the system temp directory, creating it if needed
        """
        user = os.environ.get("USER") or os.environ.get("USERNAME") or "default"
        folder = str(PurePath(tempfile.gettempdir(), f"javaupdater-{user}"))
        os.makedirs(folder, exist_ok=True)
        return folder

    @staticmethod
    def get_install_root() -> pathlib.Path:
        """
        Returns the root below which JDKs and the download cache are kept
        """
        return pathlib.Path(JavaUpdaterSettings.get_user_temp_folder())
