"""
Artifact downloads.

This package handles:
1. Streaming release archives into the download cache
2. Computing the SHA-256 digest while streaming
3. Detecting whether the archive is a tar.gz or a zip
"""

from .fetcher import ArtifactFetcher, DownloadedArtifact

__all__ = ["ArtifactFetcher", "DownloadedArtifact"]
