"""Settings resolution: command line, then .gomermaid.toml, then defaults."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from gomermaid.errors import ConfigError
from gomermaid.filters import ExclusionRules
from gomermaid.loaders import LOADER_KINDS

logger = logging.getLogger(__name__)

CONFIG_FILE = ".gomermaid.toml"

DEFAULT_PATTERN = "./..."
DEFAULT_LOADER = "auto"


@dataclass
class Settings:
    """Resolved options for one run."""

    pattern: str = DEFAULT_PATTERN
    ignore: ExclusionRules = field(default_factory=ExclusionRules)
    ignore_prefix: str = ""
    loader: str = DEFAULT_LOADER


def read_config(module_dir: Path) -> dict:
    """Return the ``[gomermaid]`` table of *module_dir*/.gomermaid.toml, if any."""
    config_path = module_dir / CONFIG_FILE
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    table = data.get("gomermaid", {})
    if not isinstance(table, dict):
        raise ConfigError(f"{config_path}: [gomermaid] must be a table")
    logger.debug("Loaded %s: %s", config_path, sorted(table))
    return table


def resolve_settings(
    module_dir: Path,
    *,
    pattern: str | None = None,
    ignore: str | None = None,
    ignore_prefix: str | None = None,
    loader: str | None = None,
) -> Settings:
    """Merge explicit options (``None`` means unset) over the config file."""
    config = read_config(module_dir)

    if ignore is not None:
        rules = ExclusionRules.from_string(ignore)
    else:
        rules = _rules_from_config(config.get("ignore"))

    if loader is None:
        loader = _str_option(config, "loader", DEFAULT_LOADER)
    if loader not in LOADER_KINDS:
        raise ConfigError(
            f"Unknown loader {loader!r}, expected one of {', '.join(LOADER_KINDS)}"
        )

    return Settings(
        pattern=(
            pattern
            if pattern is not None
            else _str_option(config, "pattern", DEFAULT_PATTERN)
        ),
        ignore=rules,
        ignore_prefix=(
            ignore_prefix
            if ignore_prefix is not None
            else _str_option(config, "ignore_prefix", "")
        ),
        loader=loader,
    )


def _rules_from_config(value: object) -> ExclusionRules:
    if value is None:
        return ExclusionRules()
    if isinstance(value, str):
        return ExclusionRules.from_string(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return ExclusionRules(v.strip() for v in value)
    raise ConfigError(f"{CONFIG_FILE}: 'ignore' must be a string or list of strings")


def _str_option(config: dict, key: str, default: str) -> str:
    value = config.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{CONFIG_FILE}: {key!r} must be a string")
    return value
