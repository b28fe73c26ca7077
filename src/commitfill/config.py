"""Configuration for a commit-fill run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError

DEFAULT_COMMIT_COUNT = 120
DEFAULT_BRANCH = "master"
DEFAULT_REMOTE = "origin"
DEFAULT_STATUS_FILE = Path("data.json")


def as_path(name: str, value: Any) -> Path:
    """Convert a string or path config value to :class:`Path`."""
    if isinstance(value, Path):
        return value
    if isinstance(value, str) and value:
        return Path(value)
    raise ConfigError(f"{name} must be a path string, got {value!r}")


@dataclass(slots=True)
class FillConfig:
    """Runtime configuration for the commit driver.

    Attributes
    ----------
    commit_count:
        Number of backdated commits to create before the closing push.
    branch:
        Local branch that is pushed after every commit.
    remote:
        Remote the branch is pushed to, with upstream tracking.
    status_file:
        File rewritten before every commit. Relative paths are resolved
        against ``repo_path``.
    repo_path:
        Working copy the commits are made in. Defaults to the current
        directory.
    seed:
        Optional seed for the week/day offset draws, for reproducible runs.
    """

    commit_count: int = DEFAULT_COMMIT_COUNT
    branch: str = DEFAULT_BRANCH
    remote: str = DEFAULT_REMOTE
    status_file: Path = DEFAULT_STATUS_FILE
    repo_path: Path = field(default_factory=Path.cwd)
    seed: int | None = None

    def __post_init__(self) -> None:
        self.status_file = as_path("status_file", self.status_file)
        self.repo_path = as_path("repo_path", self.repo_path)
        self.validate()

    def validate(self) -> None:
        """Raise :class:`ConfigError` when a value is out of range."""
        if isinstance(self.commit_count, bool) or not isinstance(self.commit_count, int):
            raise ConfigError(f"commit_count must be an integer, got {self.commit_count!r}")
        if self.commit_count < 0:
            raise ConfigError(f"commit_count must be >= 0, got {self.commit_count}")
        for name in ("branch", "remote"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{name} must be a non-empty string, got {value!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")

    def resolved_status_path(self) -> Path:
        """Return the absolute path of the status file."""
        if self.status_file.is_absolute():
            return self.status_file
        return (self.repo_path / self.status_file).resolve()

    def merged(self, overrides: Dict[str, Any]) -> FillConfig:
        """Return a copy with every non-``None`` entry of ``overrides`` applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return FillConfig(**values)


def detect_config_format(path: Path) -> str:
    """Detect the config file format from its suffix."""
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return "yaml"
    if suffix == ".json":
        return "json"
    raise ConfigError(f"Unsupported config file format: {path}")


def load_config_file(path: Path, base: FillConfig | None = None) -> FillConfig:
    """Load a YAML or JSON config file on top of ``base``.

    Parameters
    ----------
    path:
        Path to a ``.yaml``/``.yml`` or ``.json`` file holding a mapping.
    base:
        Configuration the file values are applied to. Defaults to
        :class:`FillConfig` defaults.

    Returns
    -------
    The merged configuration
    """
    config_format = detect_config_format(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if config_format == "yaml":
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(FillConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    values = dict(data)
    for key in ("status_file", "repo_path"):
        if values.get(key) is not None:
            values[key] = as_path(key, values[key])
    if "repo_path" in values and values["repo_path"] is not None and not values["repo_path"].is_absolute():
        values["repo_path"] = (path.parent / values["repo_path"]).resolve()

    try:
        return (base or FillConfig()).merged(values)
    except TypeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
