"""
Identifier typing module.

Rewrites generated client declarations so that identifier fields use
per-model nominal types.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import Model, Field, FieldRole, SchemaError, convert_datamodel
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .registry import ModelRegistry, ForeignKey
from .languages.typescript import BrandStyle, TypeScriptIdGenerator
from ..logging_config import get_logger
from ..utils import read_declarations, write_declarations

logger = get_logger(__name__)


def _resolve_config(
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]
) -> GeneratorConfig:
    if isinstance(config, GeneratorConfig):
        return config
    if isinstance(config, dict):
        return load_config(custom_config=config)
    if isinstance(config, (str, Path)):
        return load_config(config_file=config)
    if config is None:
        return load_config()
    raise ConfigError(f"Invalid config type: {type(config)}")


def _resolve_models(schema: Union[List[Model], Dict[str, Any]]) -> List[Model]:
    if isinstance(schema, dict):
        return convert_datamodel(schema)
    return list(schema)


def rewrite_declarations(
    schema: Union[List[Model], Dict[str, Any]],
    source: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> GenerationResult:
    """
    Rewrite declarations text for a schema.

    Args:
        schema: Converted models, or a DMMF document
        source: Pre-generated declarations text
        config: Generator configuration, dict of overrides, or config file path

    Returns:
        GenerationResult with the rewritten declarations
    """
    models = _resolve_models(schema)
    generator = TypeScriptIdGenerator(_resolve_config(config))
    return generate_code(generator, models, source)


def rewrite_declarations_file(
    schema: Union[List[Model], Dict[str, Any]],
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    output: Optional[Union[str, Path]] = None,
) -> Optional[GenerationResult]:
    """
    Rewrite a declarations file in place.

    Args:
        schema: Converted models, or a DMMF document
        config: Generator configuration; its ``output`` names the file
        output: Declarations file, overriding ``config.output``

    Returns:
        GenerationResult, or None when there is no file to rewrite

    Raises:
        GeneratorError: If the rewrite itself fails
        OSError: If the file cannot be read or written
    """
    final_config = _resolve_config(config)
    target = output if output is not None else final_config.output
    if not target:
        logger.info("No output path configured; nothing to rewrite")
        return None

    source = read_declarations(target, final_config.encoding)
    result = rewrite_declarations(schema, source, final_config)

    if not result.success:
        raise GeneratorError(result.error_message) from result.exception

    write_declarations(target, result.code, final_config.encoding)
    logger.info("Rewrote %s", target)
    return result


__version__ = "0.1.0"

__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "generate_code",
    "Model",
    "Field",
    "FieldRole",
    "SchemaError",
    "convert_datamodel",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "ModelRegistry",
    "ForeignKey",
    "BrandStyle",
    "TypeScriptIdGenerator",
    "rewrite_declarations",
    "rewrite_declarations_file",
]
