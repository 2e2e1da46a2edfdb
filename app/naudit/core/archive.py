"""Audit bundle archiving.

Packs every file of an audit bundle directory into a tar archive whose
entries are rooted at the bundle name, then gzips it:

    <root>/.audit/<drop>-AUDIT.tar
    <root>/.audit/<drop>-AUDIT.tar.gz
"""

import gzip
import logging
import shutil
import tarfile
from pathlib import Path

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when an archive cannot be written or compressed."""


def list_files(directory: Path) -> list[tuple[Path, str]]:
    """List every file below a directory.

    Args:
        directory: Directory to enumerate recursively.

    Returns:
        Sorted (absolute path, posix path relative to directory) pairs.
        Directories themselves are not listed.
    """
    base = directory.resolve()
    files = [p for p in base.rglob("*") if p.is_file()]
    return [(p, p.relative_to(base).as_posix()) for p in sorted(files)]


def write_archive(entries: list[tuple[Path, str]], prefix: str, output_path: Path) -> Path:
    """Write an uncompressed tar archive.

    Entry names always use ``/`` so the archive extracts the same way on
    every platform.

    Args:
        entries: (source file, relative label) pairs from list_files().
        prefix: Top-level directory name of every entry.
        output_path: Destination .tar path.

    Returns:
        The written archive path.

    Raises:
        ArchiveError: If a source file cannot be read or the archive written.
    """
    try:
        with tarfile.open(output_path, "w", format=tarfile.PAX_FORMAT) as tar:
            for source, label in entries:
                arcname = f"{prefix}/{label}"
                tarinfo = tar.gettarinfo(str(source), arcname=arcname)
                with open(source, "rb") as f:
                    tar.addfile(tarinfo, f)
    except OSError as e:
        raise ArchiveError(f"Cannot write archive {output_path}: {e}") from e

    logger.debug("Wrote %d entries to %s", len(entries), output_path)
    return output_path


def compress(archive_path: Path, output_path: Path) -> Path:
    """Gzip an archive, leaving the source in place.

    Args:
        archive_path: Archive to compress.
        output_path: Destination .gz path.

    Returns:
        The written compressed path.

    Raises:
        ArchiveError: If reading or writing fails.
    """
    try:
        with open(archive_path, "rb") as src, gzip.open(output_path, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except OSError as e:
        raise ArchiveError(f"Cannot compress {archive_path}: {e}") from e

    return output_path


def build_audit_archive(audit_dir: Path, audit_name: str, audit_root: Path) -> tuple[Path, Path]:
    """Archive and compress an audit bundle directory.

    Args:
        audit_dir: Bundle directory holding the report and lock files.
        audit_name: Bundle name used as entry prefix and file stem.
        audit_root: Directory receiving the .tar and .tar.gz files.

    Returns:
        Tuple of (tar path, tar.gz path).

    Raises:
        ArchiveError: If any step fails.
    """
    tar_path = audit_root / f"{audit_name}.tar"
    gz_path = audit_root / f"{audit_name}.tar.gz"

    write_archive(list_files(audit_dir), audit_name, tar_path)
    compress(tar_path, gz_path)
    return tar_path, gz_path
