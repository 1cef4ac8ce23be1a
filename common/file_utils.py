# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions used to place configuration in the target
user's home: directory creation, tree copies, idempotent line appends and
template writes. Everything created here ends up owned by the target user.
"""

import datetime
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Optional

from common.command_utils import get_symbols, log_message
from common.system_utils import TargetUser
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def _chown(path: Path, user: TargetUser) -> None:
    os.chown(path, user.uid, user.gid, follow_symlinks=False)


def chown_tree(path: Path, user: TargetUser) -> None:
    """Recursively hand `path` over to the target user."""
    _chown(path, user)
    if path.is_dir() and not path.is_symlink():
        for root, dirs, files in os.walk(path):
            for name in dirs + files:
                _chown(Path(root) / name, user)


def make_user_dirs(
    path: Path, user: TargetUser, mode: Optional[int] = None
) -> Path:
    """
    Create `path` and any missing parents, chowning every directory that was
    created. Existing directories are left untouched except for `mode`,
    which is applied to `path` itself when given.
    """
    missing: List[Path] = []
    current = path
    while not current.exists():
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent

    for directory in reversed(missing):
        directory.mkdir()
        _chown(directory, user)

    if mode is not None:
        path.chmod(mode)
    return path


def copy_tree(
    source_dir: Path,
    dest_dir: Path,
    user: TargetUser,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Copy the contents of `source_dir` into `dest_dir`, merging with and
    overwriting what is already there, and chown the result to `user`.

    Raises:
        FileNotFoundError: `source_dir` does not exist.
        OSError: Creating or copying failed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    make_user_dirs(dest_dir, user)
    log_message(
        f"Copying '{source_dir}' to '{dest_dir}'.",
        "debug",
        logger_to_use,
        app_settings,
    )
    shutil.copytree(source_dir, dest_dir, symlinks=True, dirs_exist_ok=True)
    chown_tree(dest_dir, user)


def write_user_file(
    path: Path,
    content: str,
    user: TargetUser,
    mode: Optional[int] = None,
) -> None:
    """Write `content` to `path` (creating parents) owned by the target user."""
    make_user_dirs(path.parent, user)
    path.write_text(content, encoding="utf-8")
    _chown(path, user)
    if mode is not None:
        path.chmod(mode)


def link_user_file(link: Path, target: Path, user: TargetUser) -> None:
    """
    Point `link` at `target` the way 'ln -sf' does. The target need not
    exist yet; a file or link already at `link` is replaced.
    """
    make_user_dirs(link.parent, user)
    if link.is_symlink() or link.is_file():
        link.unlink()
    link.symlink_to(target)
    _chown(link, user)


def file_contains_line(path: Path, line: str, exact: bool = True) -> bool:
    """
    True if `path` holds `line`. With exact=False a substring match is
    enough. A missing file contains nothing; bytes that are not UTF-8 never
    match but do not fail the read.
    """
    if not path.is_file():
        return False
    content = path.read_text(encoding="utf-8", errors="surrogateescape")
    if exact:
        return line in content.splitlines()
    return line in content


def append_block_if_missing(
    path: Path,
    marker: str,
    block: str,
    user: TargetUser,
    exact: bool = False,
) -> bool:
    """
    Append `block` to `path` unless `marker` is already present.

    The file is created when missing. A newline is inserted first if the
    file does not end with one.

    Returns:
        True if the block was appended, False if it was already present.
    """
    if file_contains_line(path, marker, exact=exact):
        return False

    existed = path.exists()
    make_user_dirs(path.parent, user)
    prefix = ""
    if existed:
        current = path.read_text(encoding="utf-8", errors="surrogateescape")
        if current and not current.endswith("\n"):
            prefix = "\n"
    with open(path, "a", encoding="utf-8") as f:
        f.write(prefix + block if block.endswith("\n") else prefix + block + "\n")
    if not existed:
        _chown(path, user)
    return True


def ensure_lines(
    path: Path, lines: Iterable[str], user: TargetUser
) -> List[str]:
    """
    Append each of `lines` to `path` unless an identical line exists.

    Returns:
        The lines that were appended.
    """
    added: List[str] = []
    for line in lines:
        if append_block_if_missing(path, line, line, user, exact=True):
            added.append(line)
    return added


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree if it exists."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def backup_file(
    file_path: Path,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> Optional[Path]:
    """
    Copy a file to '<name>.bak.<timestamp>' next to it, keeping metadata.

    Returns:
        The backup path, or None if there was nothing to back up or the copy
        failed (the failure is logged).
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not file_path.is_file():
        log_message(
            f"{symbols.get('info', 'ℹ️')} File {file_path} does not exist or is not a regular file. No backup needed.",
            "debug",
            logger_to_use,
            app_settings,
        )
        return None

    timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    backup_path = file_path.with_name(f"{file_path.name}.bak.{timestamp}")
    try:
        shutil.copy2(file_path, backup_path)
        stat = file_path.stat()
        os.chown(backup_path, stat.st_uid, stat.st_gid)
    except OSError as e:
        log_message(
            f"{symbols.get('error', '❌')} Failed to backup {file_path} to {backup_path}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return None

    log_message(
        f"Backed up {file_path} to {backup_path}",
        "success",
        logger_to_use,
        app_settings,
    )
    return backup_path
