"""
Pydantic data models for the Adoptium v3 catalog responses.

Only the fields the updater relies on are declared; everything else the API
returns is kept as extra data so the models survive additive API changes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ReleaseVersion(BaseModel):
    """
    One entry of ``/v3/info/release_versions``.
    """

    major: int = Field(..., description="Feature release number, e.g. 17")
    minor: int = 0
    security: int = 0
    patch: Optional[int] = None
    build: int = Field(0, ge=0, description="Vendor build number")
    semver: str = Field(..., description="Semantic version, e.g. 17.0.1+12")
    openjdk_version: Optional[str] = None
    optional: Optional[str] = None
    pre: Optional[str] = None

    class Config:
        extra = "allow"

    @property
    def major_version(self) -> str:
        return str(self.major)


class ReleaseVersionsResponse(BaseModel):
    """
    Response body of ``/v3/info/release_versions``.
    """

    versions: List[ReleaseVersion] = Field(default_factory=list)

    class Config:
        extra = "allow"

    def find_latest(self, major_version: str) -> Optional[ReleaseVersion]:
        """
        Return the release with the highest build id among those whose major version
        equals ``major_version`` exactly. Ties keep the earliest entry in catalog order.

        Args:
            major_version: The requested major version, e.g. "17"

        Returns:
            ReleaseVersion or None if no release matches
        """
        latest: Optional[ReleaseVersion] = None
        for version in self.versions:
            if version.major_version != major_version:
                continue
            if latest is None or version.build > latest.build:
                latest = version
        return latest


class BinaryPackage(BaseModel):
    """The downloadable package of a binary."""

    checksum: str = Field(..., description="Hex encoded SHA-256 of the package")
    link: Optional[str] = None
    name: Optional[str] = None
    size: Optional[int] = None

    class Config:
        extra = "allow"


class Binary(BaseModel):
    """A binary built for one os/architecture/image type combination."""

    package: BinaryPackage
    os: Optional[str] = None
    architecture: Optional[str] = None
    image_type: Optional[str] = None
    jvm_impl: Optional[str] = None
    heap_size: Optional[str] = None

    class Config:
        extra = "allow"


class ReleaseAsset(BaseModel):
    """
    One entry of ``/v3/assets/version/{version}``.
    """

    release_name: str = Field(..., description="Release name, e.g. jdk-17.0.1+12")
    binaries: List[Binary] = Field(default_factory=list)
    vendor: Optional[str] = None

    class Config:
        extra = "allow"


class ReleaseDescriptor(BaseModel):
    """
    Everything needed to download and verify one JDK release.
    """

    major_version: str
    build_id: int = Field(..., ge=0)
    semantic_version: str
    release_name: str
    checksum: str
    download_url: str
