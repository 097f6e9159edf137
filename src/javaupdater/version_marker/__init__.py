"""
Installed build id bookkeeping.
"""

from .marker import MARKER_FILE_NAME, BuildMarker, VersionMarker

__all__ = ["MARKER_FILE_NAME", "BuildMarker", "VersionMarker"]
