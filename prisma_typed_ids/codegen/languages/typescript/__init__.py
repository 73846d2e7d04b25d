"""
TypeScript declarations module.

Retypes identifier fields of generated client declarations with
per-model nominal types.
"""

from ...core.config import load_config
from .buffer import DeclarationBuffer, Region, locate
from .generator import TypeScriptIdGenerator, RewriteStats
from .patterns import (
    retype_bare,
    retype_nullable,
    retype_filter_union,
    retype_field,
    retype_name_token,
)
from .types import BrandStyle, NominalType

__all__ = [
    "TypeScriptIdGenerator",
    "RewriteStats",
    "DeclarationBuffer",
    "Region",
    "locate",
    "retype_bare",
    "retype_nullable",
    "retype_filter_union",
    "retype_field",
    "retype_name_token",
    "BrandStyle",
    "NominalType",
    "create_generator",
    "create_strict_generator",
]


def create_generator(**kwargs):
    """
    Create a TypeScript generator.

    Args:
        **kwargs: Configuration options (id_strictness, extended, ...)

    Returns:
        Configured TypeScriptIdGenerator instance
    """
    return TypeScriptIdGenerator(load_config(custom_config=kwargs))


def create_strict_generator(**kwargs):
    """
    Create a generator whose ids require explicit construction.

    Features:
    - Mandatory brand member
    - Plain strings no longer assignable to id types
    """
    return create_generator(id_strictness="strict", **kwargs)
