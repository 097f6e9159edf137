"""
Release catalog models.

This package provides Pydantic data models for the release catalog queries
and responses consumed by the updater.
"""

from .catalog_query import (
    ArchitectureType,
    CatalogQuery,
    HeapSize,
    ImageType,
    OperatingSystemType,
    ProjectType,
    ReleaseType,
)
from .releases import (
    Binary,
    BinaryPackage,
    ReleaseAsset,
    ReleaseDescriptor,
    ReleaseVersion,
    ReleaseVersionsResponse,
)

__all__ = [
    # Query
    "ArchitectureType",
    "CatalogQuery",
    "HeapSize",
    "ImageType",
    "OperatingSystemType",
    "ProjectType",
    "ReleaseType",
    # Responses
    "Binary",
    "BinaryPackage",
    "ReleaseAsset",
    "ReleaseDescriptor",
    "ReleaseVersion",
    "ReleaseVersionsResponse",
]
