"""
javaupdater keeps a locally cached JDK in sync with the latest Adoptium
general-availability build for a requested major version.
"""

from javaupdater.java_updater import JavaUpdater, UpdateResult, UpdateStatus
from javaupdater.javaupdater_config import JavaUpdaterConfig, Platform, Vendor
from javaupdater.javaupdater_exceptions import JavaUpdaterException
from javaupdater.javaupdater_logger import JavaUpdaterLogger

__all__ = [
    "JavaUpdater",
    "UpdateResult",
    "UpdateStatus",
    "JavaUpdaterConfig",
    "Platform",
    "Vendor",
    "JavaUpdaterException",
    "JavaUpdaterLogger",
]
