"""
Release catalog access.

This package handles:
1. Listing the release versions published for a platform
2. Resolving checksum and release name for an exact version
3. Building the direct download URL of a release
"""

from .adoptium_client import AdoptiumCatalogClient, ReleaseCatalogClient

__all__ = ["AdoptiumCatalogClient", "ReleaseCatalogClient"]
