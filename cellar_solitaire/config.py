"""Configuration management.

Two formats are understood:

- the plain ``key = value`` text file (``config.txt``) holding the five
  rule/statistics settings, auto-created with defaults when missing;
- a YAML file (``*.yaml`` / ``*.yml``) that may additionally carry the
  logging, game log and statistics path sections.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from cellar_solitaire.logging import GameLogConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.txt"
DEFAULT_STATS_FILE = "stats.sav"

# Keys of the key=value format, mapped to Config fields
KEY_ALLOW_UNDO = "allow_undo"
KEY_UNDO_ALLOWANCE = "number_of_consecutive_undos_without_counting_as_undo_used"
KEY_CONSIDER_UNDO_WINS = "consider_undo_used_wins_in_statistic"
KEY_CLOSE_IS_LOSS = "closing_running_game_counts_as_loss"
KEY_REAL_MOVES = "count_real_moves"

TEXT_KEYS: dict[str, str] = {
    KEY_ALLOW_UNDO: "allow_undo",
    KEY_UNDO_ALLOWANCE: "undo_allowance",
    KEY_CONSIDER_UNDO_WINS: "consider_undo_wins",
    KEY_CLOSE_IS_LOSS: "close_is_loss",
    KEY_REAL_MOVES: "count_real_moves",
}

MAX_UNDO_ALLOWANCE = 255


class ConfigError(ValueError):
    """Malformed configuration file."""


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_seed: bool = False


class Config(BaseModel):
    """Root configuration."""

    # Rules and statistics profile
    allow_undo: bool = True
    undo_allowance: int = Field(1, ge=0, le=MAX_UNDO_ALLOWANCE)
    consider_undo_wins: bool = False
    close_is_loss: bool = False
    count_real_moves: bool = True

    # Ambient settings (YAML only)
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()
    stats_path: str = DEFAULT_STATS_FILE

    def move_fingerprint(self) -> tuple[bool]:
        """Profile key of the moving-average statistics record."""
        return (self.count_real_moves,)

    def winloss_fingerprint(self) -> tuple[bool, int, bool, bool]:
        """Profile key of the win/loss statistics record."""
        return (
            self.allow_undo,
            self.undo_allowance,
            self.consider_undo_wins,
            self.close_is_loss,
        )

    def to_text(self) -> str:
        """Render the rule settings in the key=value format."""
        lines = []
        for key, name in TEXT_KEYS.items():
            value = getattr(self, name)
            if isinstance(value, bool):
                value = "true" if value else "false"
            lines.append(f"{key} = {value}")
        return "\n".join(lines) + "\n"


@dataclass
class ConfigLoadResult:
    """Outcome of loading a configuration file."""

    config: Config
    errors: list[str] = field(default_factory=list)
    created: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigError(f"invalid bool: {value!r}")


def _parse_number(value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise ConfigError(f"invalid number: {value!r}")
    number = int(value)
    if number > MAX_UNDO_ALLOWANCE:
        raise ConfigError(f"invalid number: {value!r} (expected 0..{MAX_UNDO_ALLOWANCE})")
    return number


def parse_config_text(text: str) -> Config:
    """Parse the key=value configuration format.

    Args:
        text: File contents.

    Returns:
        Config object.

    Raises:
        ConfigError: On a missing '=', unknown key or bad value.
    """
    values: dict[str, bool | int] = {}
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        if "=" not in line:
            raise ConfigError(f"line {line_no}: missing '='")
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if key not in TEXT_KEYS:
            raise ConfigError(f"line {line_no}: invalid setting {key!r}")
        try:
            if key == KEY_UNDO_ALLOWANCE:
                values[TEXT_KEYS[key]] = _parse_number(value)
            else:
                values[TEXT_KEYS[key]] = _parse_bool(value)
        except ConfigError as e:
            raise ConfigError(f"line {line_no}: {e}") from e
    return Config(**values)


def _load_text(config_path: Path) -> ConfigLoadResult:
    text = config_path.read_text(encoding="utf-8") if config_path.exists() else ""
    if not text.strip():
        config = Config()
        config_path.write_text(config.to_text(), encoding="utf-8")
        logger.info(f"Created default config at {config_path}")
        return ConfigLoadResult(config, created=True)
    return ConfigLoadResult(parse_config_text(text))


def _load_yaml(config_path: Path) -> ConfigLoadResult:
    if not config_path.exists():
        return ConfigLoadResult(Config())

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return ConfigLoadResult(Config(**data) if data else Config())


def load_config(path: Path | str | None = None) -> ConfigLoadResult:
    """Load configuration from a key=value or YAML file.

    Problems with the file are not fatal: they are logged, listed in the
    result, and the defaults are used instead.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        ConfigLoadResult with the effective config.
    """
    if path is None:
        return ConfigLoadResult(Config())

    config_path = Path(path)
    try:
        if config_path.suffix in (".yaml", ".yml"):
            return _load_yaml(config_path)
        return _load_text(config_path)
    except (ConfigError, ValidationError, yaml.YAMLError, TypeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error parsing config {config_path}: {e}")
        return ConfigLoadResult(Config(), errors=[str(e)])
