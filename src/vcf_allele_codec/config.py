"""Configuration file support for vcf-allele-codec.

Configuration only supplies defaults for the command-line tools. Library
callers always pass ``allow_multi_base_reference`` explicitly per call.
"""

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_SECTION = "vcf_allele_codec"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class CodecConfig:
    """Defaults for command-line token parsing."""

    allow_multi_base_reference: bool = False
    log_level: str = "INFO"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    if "allow_multi_base_reference" in config_dict:
        allow = config_dict["allow_multi_base_reference"]
        if not isinstance(allow, bool):
            raise ConfigValidationError(
                f"allow_multi_base_reference must be a boolean, got {type(allow).__name__}"
            )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got '{log_level}'"
            )


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> CodecConfig:
    """Load configuration from a TOML file.

    Values are read from the ``[vcf_allele_codec]`` table. Unknown keys are
    dropped with a warning.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        CodecConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = dict(toml_data.get(CONFIG_SECTION, {}))

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)

    valid_fields = {f.name for f in fields(CodecConfig)}
    for key in sorted(set(config_dict) - valid_fields):
        logger.warning("Ignoring unknown configuration key '%s' in %s", key, config_path)

    filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}
    if "log_level" in filtered_config:
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return CodecConfig(**filtered_config)
