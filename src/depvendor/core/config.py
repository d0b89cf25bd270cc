"""Vendor configuration loading.

Options are resolved from, lowest to highest priority:

1. Built-in defaults
2. Project config: .depvendor/config.yaml (``vendor:`` mapping)
3. Environment variables: DEPVENDOR_<KEY>
4. Explicit overrides (command-line flags)
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from depvendor.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEPVENDOR_"
DEFAULT_EXTERNAL_DIR = Path(".depvendor") / "external"

# option name -> (YAML key, kind)
_OPTION_KEYS: dict[str, tuple[str, str]] = {
    "enable_deps": ("enableDeps", "bool"),
    "vendor_dir": ("vendorDir", "path"),
    "external_dir": ("externalDir", "path"),
    "fetch": ("fetch", "bool"),
    "threads": ("threads", "int"),
    "sync_jobs": ("syncJobs", "int"),
    "log_level": ("logLevel", "str"),
    "log_file": ("logFile", "path"),
}


def _default_threads() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True, slots=True)
class VendorOptions:
    """Resolved options for one invocation.

    Attributes:
        repo_root: Project root; relative directories resolve against it
        enable_deps: Whether the external dependency subsystem is enabled
        vendor_dir: Vendor directory (None if not configured)
        external_dir: External cache directory
        fetch: Whether fetching is allowed
        threads: Fetch parallelism
        sync_jobs: Number of repositories synchronized concurrently
        log_level: Logging level name
        log_file: Optional log file (stderr when unset)
    """

    repo_root: Path
    enable_deps: bool = True
    vendor_dir: Optional[Path] = None
    external_dir: Path = DEFAULT_EXTERNAL_DIR
    fetch: bool = True
    threads: int = field(default_factory=_default_threads)
    sync_jobs: int = 1
    log_level: str = "WARNING"
    log_file: Optional[Path] = None


class VendorConfig:
    """Load and resolve vendor options for a project."""

    def __init__(self, repo_root: Path) -> None:
        """Initialize vendor config.

        Args:
            repo_root: Path to repository root
        """
        self.repo_root = repo_root
        self._config: dict[str, Any] | None = None

    @property
    def config_path(self) -> Path:
        """Path to config.yaml configuration file."""
        return self.repo_root / ".depvendor" / "config.yaml"

    def _load(self) -> dict[str, Any]:
        """Load the ``vendor:`` section of the project config.

        Returns:
            Configuration dictionary, empty if file doesn't exist
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            self._config = {}
            return self._config

        try:
            data = yaml.safe_load(self.config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            # Fail closed: configuration must never silently ignore invalid YAML.
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        section = data.get("vendor", {}) if isinstance(data, dict) else None
        if not isinstance(section, dict):
            raise ConfigError(f"'vendor' in {self.config_path} must be a mapping")

        unknown = sorted(set(section) - {key for key, _ in _OPTION_KEYS.values()})
        if unknown:
            logger.warning(f"Ignoring unknown vendor options in {self.config_path}: {unknown}")

        self._config = section
        return self._config

    def resolve(self, overrides: Mapping[str, Any] | None = None) -> VendorOptions:
        """Resolve options from defaults, config file, environment and overrides.

        Args:
            overrides: Option values by option name; None values are ignored

        Returns:
            VendorOptions instance

        Raises:
            ConfigError: If a value has the wrong type
        """
        values: dict[str, Any] = {}
        section = self._load()

        for option, (key, kind) in _OPTION_KEYS.items():
            if key in section and section[key] is not None:
                values[option] = self._coerce(option, section[key], kind, source=str(self.config_path))

            env_key = ENV_PREFIX + option.upper()
            raw = os.environ.get(env_key)
            if raw is not None and raw.strip():
                values[option] = self._coerce(option, raw, kind, source=env_key)

            if overrides and overrides.get(option) is not None:
                values[option] = self._coerce(option, overrides[option], kind, source="command line")

        values.setdefault("external_dir", DEFAULT_EXTERNAL_DIR)
        for option in ("vendor_dir", "external_dir", "log_file"):
            if option in values:
                values[option] = self._resolve_path(values[option])

        options = VendorOptions(repo_root=self.repo_root, **values)

        if options.threads < 1 or options.sync_jobs < 1:
            raise ConfigError("threads and syncJobs must be at least 1")
        return options

    def _resolve_path(self, value: Path) -> Path:
        path = value.expanduser()
        return path if path.is_absolute() else self.repo_root / path

    def _coerce(self, option: str, value: Any, kind: str, *, source: str) -> Any:
        if kind == "bool":
            result = _as_bool(value)
        elif kind == "int":
            result = _as_int(value)
        elif kind == "path":
            result = Path(str(value)) if str(value).strip() else None
        else:
            result = str(value).strip() or None

        if result is None:
            raise ConfigError(
                f"Invalid value for {option} from {source}: {value!r}",
                context={"option": option, "source": source},
            )
        return result


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    low = str(value).strip().lower()
    if low in {"true", "1", "yes", "on"}:
        return True
    if low in {"false", "0", "no", "off"}:
        return False
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if re.fullmatch(r"[-+]?\d+", str(value).strip() or " "):
        return int(str(value).strip())
    return None


def load_options(repo_root: Path, overrides: Mapping[str, Any] | None = None) -> VendorOptions:
    """Resolve options for ``repo_root``.

    Args:
        repo_root: Path to repository root
        overrides: Option values from the command line

    Returns:
        VendorOptions instance
    """
    return VendorConfig(repo_root).resolve(overrides)


__all__ = ["VendorConfig", "VendorOptions", "load_options", "ENV_PREFIX"]
