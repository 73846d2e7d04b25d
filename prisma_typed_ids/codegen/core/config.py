"""
Configuration management for identifier typing.

Handles loading and merging configuration from JSON files and generator
options, providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


VALID_STRICTNESS = ("lenient", "strict")

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


@dataclass
class GeneratorConfig:
    """Configuration for one rewrite run."""

    # Declarations file to rewrite in place; None means nothing to do
    output: Optional[str] = None

    # lenient: brand is optional, plain strings stay assignable
    # strict: brand is required, ids must be constructed explicitly
    id_strictness: str = "lenient"

    # Also retype create/update inputs and their without-relation variants
    extended: bool = True

    encoding: str = "utf-8"

    # Custom settings carried through untouched
    custom: Dict[str, Any] = field(default_factory=dict)


# Generator option names as written in a Prisma schema block
_OPTION_ALIASES = {
    "idStrictness": "id_strictness",
    "strictness": "id_strictness",
    "extendedVariants": "extended",
}


def coerce_bool(value: Any, name: str) -> bool:
    """Coerce string-valued generator options to booleans."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    if isinstance(value, int):
        return bool(value)
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "id_strictness": "lenient",
            "extended": True,
            "encoding": "utf-8",
        }

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = self._defaults.copy()

        if config_file:
            base_config.update(self._normalize(self._load_config_file(config_file)))

        if custom_config:
            base_config.update(self._normalize(custom_config))

        return self._dict_to_config(base_config)

    def _normalize(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Map camelCase generator option names to config fields."""
        return {_OPTION_ALIASES.get(key, key): value for key, value in config.items()}

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in GeneratorConfig.__dataclass_fields__.values()}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom') or {})
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        if "extended" in config_args:
            config_args["extended"] = coerce_bool(config_args["extended"], "extended")

        if isinstance(config_args.get("id_strictness"), str):
            config_args["id_strictness"] = config_args["id_strictness"].strip().lower()

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.id_strictness not in VALID_STRICTNESS:
            warnings.append(
                f"Invalid id_strictness: {config.id_strictness} "
                f"(expected one of {', '.join(VALID_STRICTNESS)})"
            )

        if config.output is not None and not str(config.output).strip():
            warnings.append("Empty output path")

        try:
            "".encode(config.encoding)
        except LookupError:
            warnings.append(f"Unknown encoding: {config.encoding}")

        for key in config.custom:
            warnings.append(f"Unknown option ignored: {key}")

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)

