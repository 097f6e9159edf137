from .install_target import InstallTarget
from .java_updater import JavaUpdater, UpdateResult, UpdateStatus

__all__ = ["InstallTarget", "JavaUpdater", "UpdateResult", "UpdateStatus"]
