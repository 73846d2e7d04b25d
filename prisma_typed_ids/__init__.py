"""
Nominal id types for generated Prisma client declarations.

Rewrites the generated TypeScript declarations so that each model's primary
key, and every foreign key referencing it, gets its own branded string type.
"""

from .codegen import (
    __version__,
    BrandStyle,
    GenerationResult,
    GeneratorConfig,
    ModelRegistry,
    TypeScriptIdGenerator,
    convert_datamodel,
    load_config,
    rewrite_declarations,
    rewrite_declarations_file,
)

__all__ = [
    "__version__",
    "BrandStyle",
    "GenerationResult",
    "GeneratorConfig",
    "ModelRegistry",
    "TypeScriptIdGenerator",
    "convert_datamodel",
    "load_config",
    "rewrite_declarations",
    "rewrite_declarations_file",
]
