"""
Core identifier typing components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    Model,
    Field,
    FieldRole,
    SchemaError,
    convert_datamodel,
)
from .naming import NamingCase, brand_key, name_token, nominal_type_name
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema system
    "Model",
    "Field",
    "FieldRole",
    "SchemaError",
    "convert_datamodel",
    # Naming utilities
    "NamingCase",
    "brand_key",
    "name_token",
    "nominal_type_name",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
