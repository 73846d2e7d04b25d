"""
Naming utilities for nominal identifier types.

Derives the generated type name, its brand key and the conventional
foreign-key field name for a model, plus the case conversions they rely on.
"""

import re
from enum import Enum

NOMINAL_SUFFIX = "Id"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class NamingCase(Enum):
    """Case styles used in generated declarations."""
    CAMEL_CASE = "camel"      # userId
    PASCAL_CASE = "pascal"    # UserId


def is_valid_identifier(name: str) -> bool:
    """Check that a name can be used as a TypeScript identifier."""
    return bool(name) and bool(_IDENTIFIER_RE.match(name))


def convert_case(name: str, target_case: NamingCase) -> str:
    """
    Convert the first character of a name to the target case.

    Only the leading character changes, so ``HTTPLog`` becomes ``hTTPLog``
    rather than a re-tokenized name; that matches how generated clients
    spell fields derived from model names.
    """
    if not name:
        return name
    if target_case == NamingCase.CAMEL_CASE:
        return name[0].lower() + name[1:]
    if target_case == NamingCase.PASCAL_CASE:
        return name[0].upper() + name[1:]
    return name


def nominal_type_name(model_name: str) -> str:
    """Name of the nominal identifier type for a model (``User`` -> ``UserId``)."""
    return f"{model_name}{NOMINAL_SUFFIX}"


def brand_key(model_name: str) -> str:
    """String literal keying the phantom brand (``User`` -> ``__UserId``)."""
    return f"__{nominal_type_name(model_name)}"


def name_token(model_name: str) -> str:
    """Conventional foreign-key field name for a model (``User`` -> ``userId``)."""
    return convert_case(nominal_type_name(model_name), NamingCase.CAMEL_CASE)


def declaration_model_prefix(declaration_name: str) -> str:
    """Strip the ``$`` marker generated payload types carry (``$UserPayload``)."""
    return declaration_name.lstrip("$")
