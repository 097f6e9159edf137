"""
Archive installer implementation.

Extracts a verified archive next to the install directory, flattens the
wrapper directory the archive ships with and swaps the result into place.
"""

import logging
import os
import pathlib
import shutil
import stat
import tarfile
import uuid
import zipfile
from typing import Iterable, List, Tuple, Union

from javaupdater.artifact_fetcher import DownloadedArtifact
from javaupdater.javaupdater_exceptions import StructuralExtractionError, UpdaterFilesystemError
from javaupdater.javaupdater_logger import JavaUpdaterLogger
from javaupdater.javaupdater_utils import FileUtils

STAGING_SUFFIX = ".staging"
BACKUP_SUFFIX = ".previous"

MAX_ARCHIVE_ENTRIES = 50000
MAX_ARCHIVE_TOTAL_BYTES = 4 * 1024 * 1024 * 1024  # 4 GiB


def staging_dir_for(install_dir: pathlib.Path) -> pathlib.Path:
    return install_dir.with_name(install_dir.name + STAGING_SUFFIX)


def backup_dir_for(install_dir: pathlib.Path) -> pathlib.Path:
    return install_dir.with_name(install_dir.name + BACKUP_SUFFIX)


class ArchiveInstaller:
    """
    Installs a downloaded JDK archive into an install directory.

    The archive is unpacked into ``<install_dir>.staging`` and flattened there.
    Only a fully prepared staging directory is promoted: the current install
    directory is renamed to ``<install_dir>.previous``, staging is renamed to the
    install directory, and the previous tree is deleted afterwards. A failure at
    any earlier point leaves the install directory untouched.
    """

    def __init__(self, logger: JavaUpdaterLogger):
        self.logger = logger

    def install(self, artifact: DownloadedArtifact, install_dir: Union[str, pathlib.Path]) -> pathlib.Path:
        """
        Install ``artifact`` into ``install_dir``.

        Args:
            artifact: The verified archive
            install_dir: Final location of the JDK

        Returns:
            The install directory
        """
        install_dir = pathlib.Path(install_dir)
        staging_dir = staging_dir_for(install_dir)

        FileUtils.remove_tree(staging_dir)
        try:
            staging_dir.mkdir(parents=True)
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to create staging directory {staging_dir}: {e}") from e

        self.extract(artifact, staging_dir)
        self.flatten(staging_dir)
        self.promote(staging_dir, install_dir)
        return install_dir

    def extract(self, artifact: DownloadedArtifact, target_dir: pathlib.Path) -> None:
        """
        Extract the archive into ``target_dir`` using the format recorded on the artifact.
        """
        self.logger.log(
            f"Extracting {artifact.cache_path} ({'tar.gz' if artifact.is_tar else 'zip'}) to {target_dir}",
            logging.INFO,
        )
        try:
            if artifact.is_tar:
                with tarfile.open(artifact.cache_path, "r:gz") as archive:
                    self._extract_tar_safely(archive, target_dir)
            else:
                with zipfile.ZipFile(artifact.cache_path) as archive:
                    self._extract_zip_safely(archive, target_dir)
        except (tarfile.TarError, zipfile.BadZipFile) as e:
            raise StructuralExtractionError(f"Failed to extract {artifact.cache_path}: {e}") from e
        except OSError as e:
            raise UpdaterFilesystemError(f"Failed to extract {artifact.cache_path}: {e}") from e

    def flatten(self, staging_dir: pathlib.Path) -> None:
        """
        Move the children of the single top-level wrapper directory up into ``staging_dir``
        and remove the wrapper.
        """
        directories = [
            entry for entry in staging_dir.iterdir() if entry.is_dir() and not entry.is_symlink()
        ]
        if len(directories) != 1:
            raise StructuralExtractionError(
                f"Expected exactly one top-level directory in the archive, found {len(directories)}: "
                f"{sorted(d.name for d in directories)}"
            )
        wrapper = directories[0]

        # Park the wrapper under a private name so a child named like the wrapper can move up.
        parked = staging_dir / f".wrapper-{uuid.uuid4().hex}"
        try:
            os.replace(wrapper, parked)
        except OSError as e:
            raise StructuralExtractionError(f"Failed to prepare wrapper directory {wrapper.name}: {e}") from e

        moves = self._plan_moves(parked, staging_dir)
        completed = 0
        try:
            for source, target in moves:
                os.replace(source, target)
                completed += 1
            parked.rmdir()
        except OSError as e:
            raise StructuralExtractionError(
                f"Flattening {wrapper.name} failed after {completed} of {len(moves)} moves: {e}"
            ) from e

        self.logger.log(
            f"Flattened wrapper directory {wrapper.name} ({len(moves)} entries)",
            logging.DEBUG,
        )

    def promote(self, staging_dir: pathlib.Path, install_dir: pathlib.Path) -> None:
        """
        Swap ``staging_dir`` into place at ``install_dir``, keeping the old tree as a
        rollback point until the swap succeeded.
        """
        backup_dir = backup_dir_for(install_dir)
        FileUtils.remove_tree(backup_dir)

        had_previous = install_dir.exists()
        if had_previous:
            try:
                os.replace(install_dir, backup_dir)
            except OSError as e:
                raise UpdaterFilesystemError(f"Failed to move {install_dir} aside: {e}") from e

        try:
            os.replace(staging_dir, install_dir)
        except OSError as e:
            if had_previous and not install_dir.exists():
                os.replace(backup_dir, install_dir)
            raise UpdaterFilesystemError(f"Failed to promote {staging_dir} to {install_dir}: {e}") from e

        FileUtils.remove_tree(backup_dir)
        self.logger.log(f"Promoted new installation to {install_dir}", logging.INFO)

    def recover(self, install_dir: Union[str, pathlib.Path]) -> None:
        """
        Repair the state left behind by an interrupted install: restore the previous
        tree if the swap stopped halfway and drop stale staging directories.
        """
        install_dir = pathlib.Path(install_dir)
        backup_dir = backup_dir_for(install_dir)
        staging_dir = staging_dir_for(install_dir)

        if backup_dir.exists():
            # A non-empty install directory means the swap completed and only the cleanup was lost.
            if install_dir.is_dir() and any(install_dir.iterdir()):
                FileUtils.remove_tree(backup_dir)
            else:
                self.logger.log(
                    f"Restoring previous installation from {backup_dir} after an interrupted update",
                    logging.WARNING,
                )
                try:
                    if install_dir.exists():
                        install_dir.rmdir()
                    os.replace(backup_dir, install_dir)
                except OSError as e:
                    raise UpdaterFilesystemError(f"Failed to restore {backup_dir}: {e}") from e

        if staging_dir.exists():
            self.logger.log(f"Removing stale staging directory {staging_dir}", logging.DEBUG)
            FileUtils.remove_tree(staging_dir)

    @staticmethod
    def _plan_moves(
        wrapper: pathlib.Path, staging_dir: pathlib.Path
    ) -> List[Tuple[pathlib.Path, pathlib.Path]]:
        moves = []
        for child in sorted(wrapper.iterdir()):
            target = staging_dir / child.name
            if os.path.lexists(target):
                raise StructuralExtractionError(
                    f"Archive entry {child.name} collides with a top-level entry of the archive"
                )
            moves.append((child, target))
        return moves

    def _extract_tar_safely(self, archive: tarfile.TarFile, target_dir: pathlib.Path) -> None:
        root = target_dir.resolve()
        members = archive.getmembers()
        self._check_limits(len(members), (m.size for m in members if m.isfile()))
        for member in members:
            _resolve_member(root, member.name)
            if member.isdev() or member.isfifo():
                raise StructuralExtractionError(f"Archive contains a special file: {member.name}")
            if member.issym():
                _resolve_member(root, str(pathlib.PurePosixPath(member.name).parent / member.linkname))
            elif member.islnk():
                _resolve_member(root, member.linkname)

        if hasattr(tarfile, "data_filter"):
            archive.extractall(root, members=members, filter="data")
        else:
            archive.extractall(root, members=members)

    def _extract_zip_safely(self, archive: zipfile.ZipFile, target_dir: pathlib.Path) -> None:
        root = target_dir.resolve()
        members = [m for m in archive.infolist() if m.filename]
        self._check_limits(len(members), (m.file_size for m in members if not m.is_dir()))
        for member in members:
            destination = _resolve_member(root, member.filename)
            if member.is_dir():
                destination.mkdir(parents=True, exist_ok=True)
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(member) as source, destination.open("wb") as target:
                shutil.copyfileobj(source, target)
            mode = (member.external_attr >> 16) & 0o777
            if mode:
                os.chmod(destination, mode | stat.S_IRUSR | stat.S_IWUSR)

    @staticmethod
    def _check_limits(entry_count: int, sizes: Iterable[int]) -> None:
        if entry_count > MAX_ARCHIVE_ENTRIES:
            raise StructuralExtractionError(
                f"Archive contains {entry_count} entries, more than the limit of {MAX_ARCHIVE_ENTRIES}"
            )
        total = sum(sizes)
        if total > MAX_ARCHIVE_TOTAL_BYTES:
            raise StructuralExtractionError(
                f"Archive expands to {total} bytes, more than the limit of {MAX_ARCHIVE_TOTAL_BYTES}"
            )


def _resolve_member(root: pathlib.Path, name: str) -> pathlib.Path:
    path = pathlib.PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or pathlib.PureWindowsPath(name).drive:
        raise StructuralExtractionError(f"Archive contains an absolute path: {name}")
    destination = (root / pathlib.Path(*path.parts)).resolve() if path.parts else root
    try:
        destination.relative_to(root)
    except ValueError:
        raise StructuralExtractionError(f"Archive entry escapes the target directory: {name}")
    return destination
