"""
Language-specific declaration generators.

This module contains generators for the declaration languages of
generated database clients.
"""

from .typescript import TypeScriptIdGenerator, create_generator, create_strict_generator

__all__ = ["TypeScriptIdGenerator", "create_generator", "create_strict_generator"]
