"""
Configuration file support for vanitygrind.

Loads settings from .vanitygrind.yaml (working directory or any parent) or
~/.vanitygrind.yaml (user home). The VANITYGRIND_CONFIG environment variable
names an explicit file instead.

Configuration Options:
- generator: Generator executable (default: solana-keygen)
- subcommand: Generator subcommand (default: grind)
- confirm_threshold: Pattern length above which confirmation is asked
- default_count: Matches to generate when --count is not given
- case: Default case mode (sensitive, insensitive)
- out_dir: Default output directory
- artifact_suffix: Extension of generated keypair files
- auto_confirm / dry_run: Defaults for --yes / --dry-run
- max_prompt_attempts: Invalid replies tolerated per interactive prompt
- verbosity / log_file: Logging settings
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml  # type: ignore[import-untyped]

log = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "VANITYGRIND_CONFIG"
GENERATOR_ENV_VAR = "VANITYGRIND_GENERATOR"


@dataclass
class VanityConfig:
    """Configuration settings for vanitygrind.

    Attributes:
        generator: Generator executable name or path
        subcommand: Generator subcommand ('' for none)
        confirm_threshold: Pattern length above which confirmation is required
        default_count: Matches to generate when not given on the command line
        case: Default case mode
        out_dir: Default output directory (None = leave files in place)
        artifact_suffix: Extension of generated keypair files
        auto_confirm: Skip confirmation prompts by default
        dry_run: Only show the command by default
        max_prompt_attempts: Invalid replies tolerated per prompt
        verbosity: Log verbosity level 0-2
        log_file: Append JSON logs to this file instead of stderr
    """

    # Generator
    generator: str = "solana-keygen"
    subcommand: str = "grind"

    # Search settings
    confirm_threshold: int = 5
    default_count: int = 1
    case: str = "insensitive"
    auto_confirm: bool = False
    dry_run: bool = False
    max_prompt_attempts: int = 3

    # Output settings
    out_dir: str | None = None
    artifact_suffix: str = ".json"

    # Logging
    verbosity: int = 0
    log_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VanityConfig":
        """Create config from dictionary.

        Handles nested 'generator', 'search', 'output' and 'logging'
        sections from YAML. Nested values override flat ones.

        Args:
            data: Dictionary from YAML file or other source

        Returns:
            VanityConfig instance
        """
        config = cls()

        # Handle flat keys (simple format)
        if isinstance(data.get("generator"), str):
            config.generator = data["generator"]
        if "subcommand" in data:
            config.subcommand = str(data["subcommand"] or "")
        config._apply_search(data)
        config._apply_output(data)
        config._apply_logging(data)

        # Handle nested sections (structured format)
        if isinstance(data.get("generator"), dict):
            generator = data["generator"]
            if generator.get("binary"):
                config.generator = str(generator["binary"])
            if "subcommand" in generator:
                config.subcommand = str(generator["subcommand"] or "")

        if isinstance(data.get("search"), dict):
            config._apply_search(data["search"])

        if isinstance(data.get("output"), dict):
            config._apply_output(data["output"])

        if isinstance(data.get("logging"), dict):
            logging_section = data["logging"]
            if "level" in logging_section:
                logging_section = {**logging_section, "verbosity": logging_section["level"]}
            if "file" in logging_section:
                logging_section = {**logging_section, "log_file": logging_section["file"]}
            config._apply_logging(logging_section)

        return config

    def _apply_search(self, data: dict[str, Any]) -> None:
        if "confirm_threshold" in data:
            self.confirm_threshold = int(data["confirm_threshold"])
        if "default_count" in data:
            self.default_count = int(data["default_count"])
        if "case" in data and data["case"]:
            self.case = str(data["case"]).lower()
        if "auto_confirm" in data:
            self.auto_confirm = bool(data["auto_confirm"])
        if "dry_run" in data:
            self.dry_run = bool(data["dry_run"])
        if "max_prompt_attempts" in data:
            self.max_prompt_attempts = max(1, int(data["max_prompt_attempts"]))

    def _apply_output(self, data: dict[str, Any]) -> None:
        if "out_dir" in data:
            self.out_dir = str(data["out_dir"]) if data["out_dir"] else None
        if "artifact_suffix" in data and data["artifact_suffix"]:
            suffix = str(data["artifact_suffix"])
            self.artifact_suffix = suffix if suffix.startswith(".") else f".{suffix}"

    def _apply_logging(self, data: dict[str, Any]) -> None:
        if "verbosity" in data:
            self.verbosity = int(data["verbosity"])
        if "log_file" in data:
            self.log_file = str(data["log_file"]) if data["log_file"] else None

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "generator": self.generator,
            "subcommand": self.subcommand,
            "confirm_threshold": self.confirm_threshold,
            "default_count": self.default_count,
            "case": self.case,
            "auto_confirm": self.auto_confirm,
            "dry_run": self.dry_run,
            "max_prompt_attempts": self.max_prompt_attempts,
            "out_dir": self.out_dir,
            "artifact_suffix": self.artifact_suffix,
            "verbosity": self.verbosity,
            "log_file": self.log_file,
        }


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .vanitygrind.yaml config file.

    Search order:
    1. Current directory / start_dir
    2. Parent directories up to filesystem root
    3. User home directory (~/.vanitygrind.yaml)

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    names = (".vanitygrind.yaml", ".vanitygrind.yml")

    current = (start_dir or Path.cwd()).resolve()
    while True:
        for name in names:
            candidate = current / name
            if candidate.exists():
                return candidate
        if current == current.parent:
            break
        current = current.parent

    home = Path.home()
    for name in names:
        home_path = home / name
        if home_path.exists():
            return home_path

    return None


def load_config(config_path: Path | None = None, start_dir: Path | None = None) -> VanityConfig:
    """Load configuration from YAML file.

    If config_path is not provided, VANITYGRIND_CONFIG is used when set,
    otherwise .vanitygrind.yaml is searched for. VANITYGRIND_GENERATOR
    overrides the generator binary in every case.

    Args:
        config_path: Explicit path to config file (optional)
        start_dir: Directory to start searching from (optional)

    Returns:
        VanityConfig instance (default values if no config found)
    """
    path: Path | None
    if config_path:
        path = config_path
    elif os.getenv(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR]).expanduser()
    else:
        path = find_config_file(start_dir)

    config = _read_config(path)

    generator_override = os.getenv(GENERATOR_ENV_VAR)
    if generator_override:
        config.generator = generator_override

    return config


def _read_config(path: Path | None) -> VanityConfig:
    if not path or not path.exists():
        log.debug("No config file found, using defaults")
        return VanityConfig()

    log.info("Loading config", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error("Failed to parse config file", path=str(path), error=str(e))
        return VanityConfig()
    except OSError as e:
        log.error("Failed to read config file", path=str(path), error=str(e))
        return VanityConfig()

    if data is None:
        log.warning("Config file is empty", path=str(path))
        return VanityConfig()

    if not isinstance(data, dict):
        log.error("Config file must contain a mapping", path=str(path))
        return VanityConfig()

    try:
        config = VanityConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        log.error("Invalid value in config file", path=str(path), error=str(e))
        return VanityConfig()

    log.debug(
        "Config loaded",
        generator=config.generator,
        confirm_threshold=config.confirm_threshold,
        out_dir=config.out_dir,
    )
    return config


def merge_config_with_args(config: VanityConfig, args: Any) -> VanityConfig:
    """Merge config file settings with CLI arguments.

    CLI arguments take precedence over config file settings.

    Args:
        config: Configuration from config file
        args: Parsed CLI arguments (argparse.Namespace)

    Returns:
        Merged VanityConfig instance
    """
    # Flags can only switch these on
    if getattr(args, "yes", False):
        config.auto_confirm = True
    if getattr(args, "dry_run", False):
        config.dry_run = True

    # None means not specified on the CLI
    if getattr(args, "case", None) is not None:
        config.case = args.case.lower()
    if getattr(args, "out_dir", None) is not None:
        config.out_dir = args.out_dir

    if getattr(args, "verbose", 0):
        config.verbosity = args.verbose

    return config
