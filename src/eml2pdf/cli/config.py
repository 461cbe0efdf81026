#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the eml2pdf CLI.

This module finds a configuration file (JSON, TOML or YAML), loads it into a
plain dictionary and turns that dictionary into an :class:`AppConfig`. Keys
may be written in snake_case or in the PascalCase used by older
``appsettings.json`` deployments:

.. code-block:: json

    {
        "DeleteFileAfterProcessing": false,
        "GetPDFFromAttachments": true
    }

"""

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from eml2pdf.constants import DEFAULT_ATTACHMENT_SUFFIXES, DEFAULT_MAX_NESTING_DEPTH
from eml2pdf.exceptions import ConfigError
from eml2pdf.options.base import CloneFrozenMixin
from eml2pdf.options.eml import EmlOptions
from eml2pdf.options.pdf import PdfRendererOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EML2PDF_CONFIG"
DEDICATED_CONFIG_FILENAMES = [".eml2pdf.toml", ".eml2pdf.yaml", ".eml2pdf.yml", ".eml2pdf.json"]
CONFIG_FILENAMES = DEDICATED_CONFIG_FILENAMES + ["pyproject.toml"]

# appsettings.json style names
KEY_ALIASES = {
    "DeleteFileAfterProcessing": "delete_after_processing",
    "GetPDFFromAttachments": "extract_attachments",
    "AttachmentSuffixes": "attachment_suffixes",
    "MaxNestingDepth": "max_nesting_depth",
    "LogDirectory": "log_dir",
    "LogLevel": "log_level",
    "ApplicationName": "app_name",
    "Pdf": "pdf",
}

# Section of older deployments holding the remote log server settings
SEQ_SECTION = "Seq"


@dataclass(frozen=True)
class AppConfig(CloneFrozenMixin):
    """Settings for a CLI run.

    Parameters
    ----------
    delete_after_processing : bool, default False
        Delete the source message after a successful conversion instead of
        renaming it to a timestamped ``.bak`` file.
    extract_attachments : bool, default False
        Output the deepest matching attachment when one exists.
    attachment_suffixes : tuple[str, ...], default (".pdf",)
        Filename suffixes of the attachments to extract.
    max_nesting_depth : int or None, default 50
        Deepest level of embedded messages that is searched.
    log_dir : str or None, default None
        Directory for daily rotated log files.
    log_level : str, default "INFO"
        Logging level name.
    app_name : str, default "eml2pdf"
        Application name stamped on log records.
    pdf : PdfRendererOptions
        PDF page geometry and stylesheets.

    """

    delete_after_processing: bool = False
    extract_attachments: bool = False
    attachment_suffixes: tuple[str, ...] = DEFAULT_ATTACHMENT_SUFFIXES
    max_nesting_depth: Optional[int] = DEFAULT_MAX_NESTING_DEPTH
    log_dir: Optional[str] = None
    log_level: str = "INFO"
    app_name: str = "eml2pdf"
    pdf: PdfRendererOptions = field(default_factory=PdfRendererOptions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Optional[str] = None) -> "AppConfig":
        """Build an AppConfig from a loaded configuration mapping.

        Parameters
        ----------
        data : Mapping[str, Any]
            Loaded configuration; PascalCase keys are accepted
        source : str, optional
            Where the mapping came from, for error messages

        Raises
        ------
        ConfigError
            If a value has the wrong type or is out of range

        """
        values: Dict[str, Any] = {}
        for key, value in normalize_config_keys(data).items():
            if key not in _VALIDATORS:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            values[key] = _VALIDATORS[key](key, value, source)

        try:
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}", config_path=source, original_error=e) from e

    def to_eml_options(self, **overrides: Any) -> EmlOptions:
        """Return the conversion options this configuration implies."""
        values: Dict[str, Any] = {
            "extract_attachments": self.extract_attachments,
            "attachment_suffixes": self.attachment_suffixes,
            "max_nesting_depth": self.max_nesting_depth,
        }
        values.update(overrides)
        return EmlOptions(**values)


def normalize_config_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map PascalCase configuration keys to their snake_case names.

    A ``Seq`` section contributes its ``AppName`` as ``app_name``. Its
    ``ServerAddress`` is dropped since logs are only written locally.

    Examples
    --------
    >>> normalize_config_keys({"DeleteFileAfterProcessing": True})
    {'delete_after_processing': True}
    >>> normalize_config_keys({"Seq": {"ServerAddress": "http://seq:5341", "AppName": "mailer"}})
    {'app_name': 'mailer'}

    """
    normalized: Dict[str, Any] = {}
    seq_section = None
    for key, value in data.items():
        if key == SEQ_SECTION:
            seq_section = value
            continue
        normalized[KEY_ALIASES.get(key, key)] = value

    if isinstance(seq_section, Mapping):
        if "AppName" in seq_section:
            normalized.setdefault("app_name", seq_section["AppName"])
        logger.debug("Remote log server settings are not used; logs are written locally")
    elif seq_section is not None:
        logger.warning(f"Ignoring {SEQ_SECTION} configuration that is not a table: {seq_section!r}")
    return normalized


def _expect_bool(key: str, value: Any, source: Optional[str]) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}", config_path=source)
    return value


def _expect_optional_str(key: str, value: Any, source: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}", config_path=source)
    return value


def _expect_str(key: str, value: Any, source: Optional[str]) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string, got {value!r}", config_path=source)
    return value


def _expect_suffixes(key: str, value: Any, source: Optional[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not value or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a suffix or a list of suffixes, got {value!r}", config_path=source)
    return tuple(value)


def _expect_depth(key: str, value: Any, source: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"'{key}' must be a positive integer, got {value!r}", config_path=source)
    return value


def _expect_pdf(key: str, value: Any, source: Optional[str]) -> PdfRendererOptions:
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a table, got {value!r}", config_path=source)
    if "stylesheets" in value and isinstance(value["stylesheets"], str):
        value = {**value, "stylesheets": [value["stylesheets"]]}
    try:
        return PdfRendererOptions.from_mapping(value)
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid '{key}' settings: {e}", config_path=source, original_error=e) from e


_VALIDATORS = {
    "delete_after_processing": _expect_bool,
    "extract_attachments": _expect_bool,
    "attachment_suffixes": _expect_suffixes,
    "max_nesting_depth": _expect_depth,
    "log_dir": _expect_optional_str,
    "log_level": _expect_str,
    "app_name": _expect_str,
    "pdf": _expect_pdf,
}


def _load_pyproject_eml2pdf_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.eml2pdf] section from a pyproject.toml file.

    Returns
    -------
    dict
        Configuration from [tool.eml2pdf], or an empty dict if there is none

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", config_path=str(pyproject_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", config_path=str(pyproject_path)) from e

    config = data.get("tool", {}).get("eml2pdf", {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.eml2pdf] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    Each directory is checked for the dedicated ``.eml2pdf.*`` files first,
    then for a pyproject.toml with a [tool.eml2pdf] section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_eml2pdf_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                logger.debug(f"Skipping unreadable {pyproject_path}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in standard locations.

    Searches ``start_dir`` (default: cwd) and its parents, then the user's
    home directory for ``.eml2pdf.toml``, ``.eml2pdf.yaml``, ``.eml2pdf.yml``
    or ``.eml2pdf.json``.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be parsed, or has an unsupported
        extension

    Examples
    --------
    >>> config = load_config_file("appsettings.json")
    >>> config.get("DeleteFileAfterProcessing")
    False

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_eml2pdf_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)
    raise ConfigError(
        f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", config_path=str(config_path)
    )


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", config_path=str(config_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading TOML config {config_path}: {e}", config_path=str(config_path)) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        # utf-8-sig tolerates the BOM Windows editors put in appsettings.json
        with open(config_path, "r", encoding="utf-8-sig") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", config_path=str(config_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading JSON config {config_path}: {e}", config_path=str(config_path)) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"JSON config file must contain an object, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", config_path=str(config_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading YAML config {config_path}: {e}", config_path=str(config_path)) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def load_app_config(explicit_path: Optional[str] = None, env_var_path: Optional[str] = None) -> AppConfig:
    """Load the CLI configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (EML2PDF_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    AppConfig
        Loaded configuration, or defaults when no file is found

    Raises
    ------
    ConfigError
        If a config file is found but cannot be loaded or is invalid

    """
    if env_var_path is None:
        env_var_path = os.environ.get(CONFIG_ENV_VAR)

    config_path: Optional[Path]
    if explicit_path:
        config_path = Path(explicit_path)
    elif env_var_path:
        config_path = Path(env_var_path)
    else:
        config_path = discover_config_file()

    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return AppConfig()

    logger.debug(f"Loading configuration from {config_path}")
    return AppConfig.from_dict(load_config_file(config_path), source=str(config_path))


__all__ = [
    "AppConfig",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAMES",
    "discover_config_file",
    "find_config_in_parents",
    "load_app_config",
    "load_config_file",
    "normalize_config_keys",
]
