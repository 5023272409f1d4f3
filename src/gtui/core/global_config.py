"""User configuration loaded from ~/.gtui/config.toml.

The file is optional; every field has a default. Loaded once at the CLI
entry point and stored in GtuiContext.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import tomlkit

from gtui.core.navigation import Pane


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable user configuration.

    Attributes:
        graphite_dir: Directory holding gt metadata, relative to the repo root
        gt_command: Executable used for repository actions
        stack_height: Visible rows in the stack pane
        commits_height: Visible rows in the commits pane
        detail_height: Visible rows in the detail pane
        log_height: Visible rows in the command log pane
    """

    graphite_dir: str = ".git"
    gt_command: str = "gt"
    stack_height: int = 10
    commits_height: int = 10
    detail_height: int = 20
    log_height: int = 8

    def viewport_height(self, pane: Pane) -> int:
        """Visible line count for a pane. The overview pane is not scrollable."""
        heights = {
            Pane.STACK: self.stack_height,
            Pane.COMMITS: self.commits_height,
            Pane.DETAIL_VIEW: self.detail_height,
            Pane.LOG: self.log_height,
        }
        return heights.get(pane, 0)


_INT_FIELDS = ("stack_height", "commits_height", "detail_height", "log_height")
_STR_FIELDS = ("graphite_dir", "gt_command")


def parse_global_config(data: dict[str, object], *, source: Path) -> GlobalConfig:
    """Build a GlobalConfig from parsed TOML, applying defaults for missing keys.

    Raises:
        ValueError: If a key has the wrong type or a height is negative
    """
    values: dict[str, object] = {}
    for key in _STR_FIELDS:
        if key in data:
            if not isinstance(data[key], str):
                raise ValueError(f"'{key}' must be a string in {source}")
            values[key] = data[key]
    for key in _INT_FIELDS:
        if key in data:
            value = data[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"'{key}' must be a non-negative integer in {source}")
            values[key] = value
    return GlobalConfig(**values)  # type: ignore[arg-type]


class ConfigStore(ABC):
    """Abstract interface for global config access."""

    @abstractmethod
    def exists(self) -> bool:
        """Check if the config file exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load config, returning defaults if it does not exist.

        Raises:
            ValueError: If the config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: GlobalConfig) -> None:
        """Persist config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path of the config file (for error messages)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.gtui/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        config_path = self.path()
        if not config_path.exists():
            return GlobalConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return parse_global_config(data, source=config_path)

    def save(self, config: GlobalConfig) -> None:
        """Write config, preserving comments and unknown keys already in the file."""
        config_path = self.path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("gtui configuration"))

        for key in _STR_FIELDS + _INT_FIELDS:
            doc[key] = getattr(config, key)

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".gtui" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            return GlobalConfig()
        return self._config

    def save(self, config: GlobalConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/gtui/config.toml")
