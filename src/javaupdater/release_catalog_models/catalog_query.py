"""
Filters accepted by the Adoptium v3 release catalog.
"""

from enum import Enum
from typing import Dict, Union

from pydantic import BaseModel, Field

from javaupdater.javaupdater_utils import Platform


class OperatingSystemType(str, Enum):
    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"

    @classmethod
    def for_platform(cls, platform: Platform) -> "OperatingSystemType":
        return cls(platform.value)


class ArchitectureType(str, Enum):
    X64 = "x64"
    X86 = "x86"
    AARCH64 = "aarch64"
    ARM = "arm"


class ImageType(str, Enum):
    JDK = "jdk"
    JRE = "jre"


class HeapSize(str, Enum):
    NORMAL = "normal"
    LARGE = "large"


class ProjectType(str, Enum):
    JDK = "jdk"


class ReleaseType(str, Enum):
    GENERAL_AVAILABILITY = "ga"
    EARLY_ACCESS = "ea"


class CatalogQuery(BaseModel):
    """
    The set of filters sent with every catalog request.

    The same query is used to list release versions, to fetch binary details for
    an exact version and to build the download URL, so the three requests always
    agree on the binary they describe.
    """

    os: OperatingSystemType
    architecture: ArchitectureType = ArchitectureType.X64
    image_type: ImageType = ImageType.JDK
    heap_size: HeapSize = HeapSize.NORMAL
    project: ProjectType = ProjectType.JDK
    release_type: ReleaseType = ReleaseType.GENERAL_AVAILABILITY
    jvm_impl: str = "hotspot"
    vendor: str = Field("eclipse", description="Vendor identifier expected by the Adoptium API")
    page_size: int = Field(50, gt=0)
    sort_method: str = "DEFAULT"
    sort_order: str = "DESC"

    def to_params(self) -> Dict[str, Union[str, int]]:
        """Query string parameters for the list endpoints."""
        return {
            "architecture": self.architecture.value,
            "heap_size": self.heap_size.value,
            "image_type": self.image_type.value,
            "os": self.os.value,
            "page": 0,
            "page_size": self.page_size,
            "project": self.project.value,
            "release_type": self.release_type.value,
            "sort_method": self.sort_method,
            "sort_order": self.sort_order,
            "vendor": self.vendor,
        }
