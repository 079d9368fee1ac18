"""Configuration loading from an optional YAML file, env vars, and CLI args."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    log_folder: str = "./GrafanaLogs"
    report_folder: str = "./Reports"
    report_filename_format: str = "%Y-%m-%d %H:%M:%S"
    display_results: bool = True
    close_when_finished: bool = True


ENV_VARS = {
    "log_folder": "LOG_FOLDER",
    "report_folder": "REPORT_FOLDER",
    "report_filename_format": "REPORT_FILENAME_FORMAT",
    "display_results": "DISPLAY_RESULTS",
    "close_when_finished": "CLOSE_WHEN_FINISHED",
}

_BOOL_FIELDS = ("display_results", "close_when_finished")


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if unavailable."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s (%s), using defaults", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args=None, yaml_data: dict | None = None) -> Config:
    """Build Config: defaults <- YAML <- env vars <- CLI args."""
    settings = {f.name: f.default for f in fields(Config)}

    for name, value in (yaml_data or {}).items():
        if name in settings and value is not None:
            settings[name] = value
        elif name not in settings:
            logger.warning("Ignoring unknown config key: %s", name)

    for name, env_var in ENV_VARS.items():
        raw = os.environ.get(env_var)
        if raw is not None:
            settings[name] = raw

    if cli_args is not None:
        for name in ENV_VARS:
            value = getattr(cli_args, name, None)
            if value is not None:
                settings[name] = value

    for name in _BOOL_FIELDS:
        settings[name] = _parse_bool(settings[name])
    for name in ENV_VARS:
        if name not in _BOOL_FIELDS:
            settings[name] = str(settings[name])

    return Config(**settings)


def describe_config(config: Config) -> str:
    """Settings listing shown at start-up."""
    lines = ["AppSettings:"]
    for f in fields(config):
        lines.append(f" > {f.name}: {getattr(config, f.name)}")
    return "\n".join(lines)
