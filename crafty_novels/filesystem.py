"""Filesystem helpers for crafty-novels."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_ENCODING, DEFAULT_MAX_FILE_SIZE

MAX_FILE_SIZE_ENV_VAR = "CRAFTY_NOVELS_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the export size limit in bytes.

    `CRAFTY_NOVELS_MAX_FILE_SIZE` takes precedence over `default`, which is
    normally the configured `max_file_size`.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.
    """
    raw_limit = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_limit is None:
        return default

    try:
        limit = int(raw_limit)
    except ValueError as error:
        raise ValueError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a whole number of bytes, got {raw_limit!r}"
        ) from error
    if limit <= 0:
        raise ValueError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive number of bytes, got {limit}"
        )
    return limit


def contains_symlink(path: Path) -> bool:
    """Whether `path` or one of its ancestors is a symlink; unreadable entries are skipped."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate an input filepath.

    Args:
        raw_path: User-supplied path to an export (absolute or relative).

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or
            traverses a symlink.

    Examples:
        normalize_filepath("books/diary.stendhal")
        normalize_filepath("~/diary.txt")
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat an export or output file without following symlinks.

    FIFOs, sockets and devices are refused along with symlinks, so a later
    read can never block or wander off the regular file.

    Raises:
        IOError: If the path cannot be stat'ed or is not a regular file.
    """
    try:
        file_stat = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    mode = file_stat.st_mode
    if stat.S_ISLNK(mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")
    if not stat.S_ISREG(mode):
        raise IOError(f"{filepath} is not a regular file.")
    return file_stat


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def safe_read(filepath: Path, encoding: str = DEFAULT_ENCODING) -> TextIO:
    """Open a file for reading with consistent error handling.

    Only ``"\\n"`` ends a line and nothing is translated, so the tokenizer sees
    the same line endings as the file holds.

    Args:
        filepath: Path to the file.
        encoding: Text encoding of the file.

    Returns:
        TextIO: File handle opened for reading.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("diary.stendhal")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding=encoding, newline="\n")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def write_output(
    filepath: Path,
    write: Callable[[TextIO], None],
    overwrite: bool = False,
    warn: Callable[[str], None] | None = None,
):
    """Write a file atomically through a temporary sibling file.

    `write` receives an open text stream; once it returns, the stream is
    flushed and synced and the temporary file replaces `filepath`. If `write`
    raises, the target is left untouched and the error propagates.

    Args:
        filepath: Destination path.
        write: Callback that writes the full content into the given stream.
        overwrite: Whether an existing file at `filepath` may be replaced.
        warn: Optional callback for emitting non-fatal warnings.

    Raises:
        IOError: If the target exists and `overwrite` is False, is not a
            regular file, or cannot be replaced.

    Examples:
        write_output(Path("book.html"), lambda stream: stream.write(html))
    """
    permissions = 0o644
    if filepath.exists() or filepath.is_symlink():
        if not overwrite:
            error_message = f"{filepath} already exists; use --force to overwrite it."
            raise IOError(error_message)
        permissions = stat.S_IMODE(collect_file_stat(filepath).st_mode)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, suffix=".tmp"
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            write(tmp_file)

            tmp_file.flush()
            os.fsync(tmp_file.fileno())

            try:
                os.chmod(tmp_file.name, permissions)
            except PermissionError:
                if warn is not None:
                    warn(f"Warning: Could not set file permissions for {filepath.name}")

        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
