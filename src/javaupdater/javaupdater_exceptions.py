"""
This file contains the exceptions raised by javaupdater.
"""


class JavaUpdaterException(Exception):
    """
    Base class for all exceptions raised while checking for or installing a JDK update.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedVendorError(JavaUpdaterException):
    """
    Raised before any I/O when the requested vendor has no release catalog.
    """


class NetworkError(JavaUpdaterException):
    """
    Raised when the release catalog or an artifact download cannot be reached.
    """


class CatalogResponseError(JavaUpdaterException):
    """
    Raised when the release catalog returns a payload that cannot be understood.
    """


class HashVerificationError(JavaUpdaterException):
    """
    Raised when a downloaded artifact does not match the checksum published by the catalog.
    """


class StructuralExtractionError(JavaUpdaterException):
    """
    Raised when an extracted archive does not have the single wrapper directory layout,
    contains unsafe members, or cannot be flattened.
    """


class UpdaterFilesystemError(JavaUpdaterException):
    """
    Raised when the build marker, the install directory or the download cache cannot be written.
    """
