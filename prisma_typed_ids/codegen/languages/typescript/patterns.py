"""
Field retyping recipes.

Each recipe only matches the primitive ``string`` spelling of a property
type, so applying it to text it already converted is a no-op.
"""

import re
from functools import lru_cache
from typing import Pattern, Tuple

# Property name not glued to a longer identifier or a member access
_NAME_PREFIX = r"(?<![\w$.])"

# Where a property type ends: separator, closing brace, comment, or end of line
_TYPE_END = r"(?=[ \t]*(?:[;,}]|//|\r?$))"

_NULL_MEMBER = r"[ \t]*\|[ \t]*null"


@lru_cache(maxsize=None)
def _bare_pattern(field_name: str) -> Pattern[str]:
    return re.compile(
        _NAME_PREFIX
        + r"(?P<head>" + re.escape(field_name) + r"\??:[ \t]*)"
        + r"string" + _TYPE_END,
        re.MULTILINE,
    )


@lru_cache(maxsize=None)
def _nullable_pattern(field_name: str) -> Pattern[str]:
    return re.compile(
        _NAME_PREFIX
        + r"(?P<head>" + re.escape(field_name) + r"\??:[ \t]*)"
        + r"string(?P<tail>" + _NULL_MEMBER + r")" + _TYPE_END,
        re.MULTILINE,
    )


@lru_cache(maxsize=None)
def _filter_union_pattern(field_name: str) -> Pattern[str]:
    # Wrapper is any single union member other than string/null, generic
    # arguments included: StringFilter<"Post">, StringFieldUpdateOperationsInput
    return re.compile(
        _NAME_PREFIX
        + r"(?P<head>" + re.escape(field_name) + r"\??:[ \t]*"
        + r"(?!(?:string|null)\b)[^|\n;{}]*?[^|\s;{}][ \t]*\|[ \t]*)"
        + r"string(?P<tail>(?:" + _NULL_MEMBER + r")?)" + _TYPE_END,
        re.MULTILINE,
    )


def retype_bare(text: str, field_name: str, nominal: str) -> Tuple[str, int]:
    """``name: string`` / ``name?: string`` -> ``name: Nominal``."""
    return _bare_pattern(field_name).subn(
        lambda m: m.group("head") + nominal, text
    )


def retype_nullable(text: str, field_name: str, nominal: str) -> Tuple[str, int]:
    """``name: string | null`` -> ``name: Nominal | null``."""
    return _nullable_pattern(field_name).subn(
        lambda m: m.group("head") + nominal + m.group("tail"), text
    )


def retype_filter_union(text: str, field_name: str, nominal: str) -> Tuple[str, int]:
    """``name?: Wrapper<...> | string`` -> ``name?: Wrapper<...> | Nominal``.

    Only the trailing string member changes; a trailing ``| null`` is kept.
    """
    return _filter_union_pattern(field_name).subn(
        lambda m: m.group("head") + nominal + m.group("tail"), text
    )


RECIPES = (retype_bare, retype_nullable, retype_filter_union)


def retype_field(text: str, field_name: str, nominal: str) -> Tuple[str, int]:
    """Apply every recipe for one field to a piece of text."""
    total = 0
    for recipe in RECIPES:
        text, count = recipe(text, field_name, nominal)
        total += count
    return text, total


def retype_name_token(text: str, token: str, nominal: str) -> Tuple[str, int]:
    """
    Retype every required or optional property spelled exactly ``token``.

    Used for conventionally named key columns (``userId``) that recur across
    many generated input variants; the caller decides which text is in scope.
    """
    return retype_field(text, token, nominal)


def field_rewrite(field_name: str, nominal: str):
    """Bind a field and its nominal type into a buffer rewrite callable."""
    def rewrite(segment: str) -> Tuple[str, int]:
        return retype_field(segment, field_name, nominal)

    return rewrite
