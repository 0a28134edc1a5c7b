"""Configuration loading and management."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_ENCODING, DEFAULT_MAX_FILE_SIZE


@dataclass
class ConvertConfig:
    """Configuration for converting Stendhal exports.

    Attributes:
        encoding: Text encoding of input files.
        max_file_size: Maximum input size in bytes that will be processed.
        overwrite: Whether an existing output file may be replaced.

    Examples:
        ConvertConfig(encoding="utf-8", overwrite=True)
    """

    encoding: str = DEFAULT_ENCODING
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    overwrite: bool = False


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> ConvertConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.crafty-novels]`` table from `pyproject.toml` and the
    ``[crafty-novels]`` or ``[tool.crafty-novels]`` table from
    `.crafty-novels.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConvertConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("books"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "crafty-novels")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".crafty-novels.toml",
            table_paths=[("crafty-novels",), ("tool", "crafty-novels")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConvertConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ConvertConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ConvertConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ConvertConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys are conventionally kebab-case
    raw_config = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return ConvertConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ConvertConfig) -> None:
    """Validate a `ConvertConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the encoding is unknown, the size limit is not a
            positive integer, or `overwrite` is not a boolean.

    Examples:
        validate_config(ConvertConfig(max_file_size=1024))
    """
    if not isinstance(config.encoding, str) or not config.encoding:
        raise ConfigError("`encoding` must be a non-empty string")
    try:
        codecs.lookup(config.encoding)
    except LookupError as error:
        raise ConfigError(f"Unknown `encoding`: {config.encoding}") from error

    if isinstance(config.max_file_size, bool) or not isinstance(config.max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    if not isinstance(config.overwrite, bool):
        raise ConfigError("`overwrite` must be a boolean")


def apply_overrides(config: ConvertConfig, **overrides: object) -> ConvertConfig:
    """Apply override values to a `ConvertConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConvertConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ConvertConfig`.

    Examples:
        updated = apply_overrides(config, overwrite=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConvertConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConvertConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), encoding="latin-1")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
