from __future__ import annotations

import os
import socket
import stat
import textwrap
from pathlib import Path

import pytest

from crafty_novels.cli import cli
from crafty_novels.filesystem import MAX_FILE_SIZE_ENV_VAR

BOOK = """\
title: Book
author: Author
pages:
#- Hello
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    target = tmp_path / name
    target.write_text(textwrap.dedent(content), encoding="utf-8")
    return target


def _error_text(result) -> str:
    """Return combined output and exception text for assertions."""
    return f"{result.output}{result.exception}"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_symlink_rejected(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "source.stendhal", BOOK)
    link = tmp_path / "alias.stendhal"
    try:
        os.symlink(source, link, target_is_directory=False)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    result = cli_runner.invoke(cli, [str(link)])
    assert result.exit_code != 0
    assert "Symlinks" in result.output


def test_file_size_limit_enforced(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "10")
    target = _write(tmp_path, "large.stendhal", BOOK)

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code != 0
    assert "maximum allowed size" in _error_text(result)


def test_file_size_limit_from_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
    _write(tmp_path, "pyproject.toml", "[tool.crafty-novels]\nmax-file-size = 8\n")
    target = _write(tmp_path, "large.stendhal", BOOK)

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code != 0
    assert "maximum allowed size of 8 bytes" in _error_text(result)


def test_environment_overrides_config_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "4096")
    _write(tmp_path, "pyproject.toml", "[tool.crafty-novels]\nmax-file-size = 8\n")
    target = _write(tmp_path, "book.stendhal", BOOK)

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 0


def test_invalid_size_environment_variable(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")
    target = _write(tmp_path, "book.stendhal", BOOK)

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code != 0
    assert MAX_FILE_SIZE_ENV_VAR in result.output


def test_invalid_utf8_handling(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "broken.stendhal"
    target.write_bytes(b"\xff\xfetitle: Book\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code != 0
    assert "Invalid utf-8 sequence" in _error_text(result)


def test_permissions_preserved_on_overwrite(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "book.stendhal", BOOK)
    output = _write(tmp_path, "book.html", "old")
    desired_mode = 0o640
    os.chmod(output, desired_mode)

    result = cli_runner.invoke(cli, [str(target), "-o", str(output), "--force"])
    assert result.exit_code == 0
    assert stat.S_IMODE(output.stat().st_mode) == desired_mode


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_output_symlink_not_followed(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "book.stendhal", BOOK)
    victim = _write(tmp_path, "victim.txt", "untouched")
    link = tmp_path / "book.html"
    os.symlink(victim, link)

    result = cli_runner.invoke(cli, [str(target), "-o", str(link), "--force"])
    assert result.exit_code != 0
    assert "Symlinks" in result.output
    assert victim.read_text(encoding="utf-8") == "untouched"


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo not available")
def test_fifo_rejected(cli_runner, tmp_path, monkeypatch):
    """FIFOs would block the read, so they are refused before opening."""
    monkeypatch.chdir(tmp_path)
    fifo_path = tmp_path / "pipe.stendhal"

    try:
        os.mkfifo(fifo_path)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create FIFO: {error}")

    result = cli_runner.invoke(cli, [str(fifo_path)])
    assert result.exit_code != 0
    assert "is not a regular file" in _error_text(result)


@pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="Unix sockets not available")
def test_socket_rejected(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    socket_path = tmp_path / "socket.stendhal"

    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(str(socket_path))
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create socket: {error}")
    finally:
        sock.close()

    result = cli_runner.invoke(cli, [str(socket_path)])
    assert result.exit_code != 0
    assert "is not a regular file" in _error_text(result)
