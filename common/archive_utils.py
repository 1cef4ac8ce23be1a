# common/archive_utils.py
# -*- coding: utf-8 -*-
"""
Fetching and unpacking theme sources: local archives (zip or tar), archives
downloaded over HTTP, and git repositories.
"""

import logging
import os
import stat
import tarfile
import zipfile
from pathlib import Path
from typing import List, Optional, Union

import requests

from common.command_utils import get_symbols, log_message, run_command
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT_SECONDS = 60
DOWNLOAD_CHUNK_SIZE = 1024 * 64


class ArchiveError(Exception):
    """Raised when an archive cannot be read or is of an unsupported type."""


def _is_within(base: str, path: str) -> bool:
    return os.path.commonpath([base, path]) == base


def _extract_zip(zip_ref: zipfile.ZipFile, dest_dir: Path) -> None:
    """
    Extract every member of `zip_ref`, recreating symlink entries as links.
    zipfile alone writes a symlink entry out as a file holding its target.
    Links whose target leaves `dest_dir` are refused, as tar's data filter does.
    """
    base = os.path.realpath(dest_dir)
    links = []
    for info in zip_ref.infolist():
        if stat.S_ISLNK(info.external_attr >> 16):
            links.append(info)
        else:
            zip_ref.extract(info, dest_dir)

    for info in links:
        target = zip_ref.read(info).decode("utf-8")
        link_path = os.path.normpath(os.path.join(base, info.filename.rstrip("/")))
        resolved = os.path.normpath(
            os.path.join(os.path.dirname(link_path), target)
        )
        if (
            os.path.isabs(target)
            or not _is_within(base, link_path)
            or not _is_within(base, resolved)
        ):
            raise ArchiveError(
                f"Refusing symlink '{info.filename}' -> '{target}': outside the destination"
            )
        os.makedirs(os.path.dirname(link_path), exist_ok=True)
        if os.path.lexists(link_path):
            os.unlink(link_path)
        os.symlink(target, link_path)


def extract_archive(archive_path: Union[str, Path], dest_dir: Union[str, Path]) -> List[str]:
    """
    Extract a zip or tar archive (any compression tarfile supports) into
    `dest_dir`, which is created if needed.

    Returns:
        The sorted names of the top-level entries in `dest_dir` afterwards.

    Raises:
        FileNotFoundError: The archive does not exist.
        ArchiveError: The file is neither a zip nor a tar archive, is corrupt,
            or holds a link pointing outside `dest_dir`.
    """
    archive_path = Path(archive_path)
    dest_dir = Path(dest_dir)
    if not archive_path.is_file():
        raise FileNotFoundError(f"Archive not found: {archive_path}")
    dest_dir.mkdir(parents=True, exist_ok=True)

    try:
        if zipfile.is_zipfile(archive_path):
            with zipfile.ZipFile(archive_path, "r") as zip_ref:
                _extract_zip(zip_ref, dest_dir)
        elif tarfile.is_tarfile(archive_path):
            with tarfile.open(archive_path, "r:*") as tar_ref:
                if hasattr(tarfile, "data_filter"):
                    tar_ref.extractall(dest_dir, filter="data")
                else:  # pragma: no cover
                    tar_ref.extractall(dest_dir)
        else:
            raise ArchiveError(f"Unsupported archive format: {archive_path}")
    except (zipfile.BadZipFile, tarfile.TarError) as e:
        raise ArchiveError(f"Could not extract '{archive_path}': {e}") from e

    return sorted(item.name for item in dest_dir.iterdir())


def download_file(
    url: str,
    dest_path: Union[str, Path],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Stream `url` to `dest_path`.

    Raises:
        requests.RequestException: The download failed or returned an error status.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    dest_path = Path(dest_path)
    log_message(
        f"{symbols.get('package', '📦')} Downloading {url}",
        "info",
        logger_to_use,
        app_settings,
    )
    with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT_SECONDS) as response:
        response.raise_for_status()
        with open(dest_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    log_message(
        f"Downloaded {url} to {dest_path}", "debug", logger_to_use, app_settings
    )
    return dest_path


def clone_repository(
    url: str,
    dest_dir: Union[str, Path],
    app_settings: Optional[AppSettings],
    branch: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Shallow-clone `url` into `dest_dir`.

    Raises:
        subprocess.CalledProcessError: git failed.
        FileNotFoundError: git is not installed.
    """
    command = ["git", "clone", "--depth", "1"]
    if branch:
        command += ["--branch", branch]
    command += [url, str(dest_dir)]
    run_command(command, app_settings, current_logger=current_logger)
    return Path(dest_dir)


def locate_extracted_root(
    staging_dir: Path,
    expected_name: Optional[str] = None,
    name_glob: Optional[str] = None,
) -> Optional[Path]:
    """
    Find the directory holding the unpacked theme inside `staging_dir`.

    Resolution order: the explicitly expected directory name, then the first
    directory (sorted) matching `name_glob`, then the only top-level
    directory if the archive produced exactly one. When the archive unpacked
    loose files and no directory matched, `staging_dir` itself is the root.
    Returns None if nothing usable was found.
    """
    if expected_name:
        candidate = staging_dir / expected_name
        return candidate if candidate.is_dir() else None

    directories = sorted(p for p in staging_dir.iterdir() if p.is_dir())
    if name_glob:
        matches = sorted(p for p in staging_dir.glob(name_glob) if p.is_dir())
        return matches[0] if matches else None

    if len(directories) == 1:
        return directories[0]
    if not directories and any(staging_dir.iterdir()):
        return staging_dir
    return None
