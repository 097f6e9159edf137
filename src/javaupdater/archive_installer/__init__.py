"""
Archive installation.

This package handles:
1. Safely extracting tar.gz and zip archives into a staging directory
2. Flattening the single wrapper directory of the archive
3. Promoting the staging directory over the install directory
"""

from .installer import BACKUP_SUFFIX, STAGING_SUFFIX, ArchiveInstaller

__all__ = ["ArchiveInstaller", "BACKUP_SUFFIX", "STAGING_SUFFIX"]
