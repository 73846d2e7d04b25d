"""
Nominal identifier types for TypeScript declarations.

A nominal type is the primitive string intersected with a phantom brand
member keyed by a model-specific string literal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ...core.config import ConfigError, VALID_STRICTNESS
from ...core.naming import brand_key, name_token, nominal_type_name


class BrandStyle(Enum):
    """How strongly a nominal type is separated from plain strings."""

    LENIENT = "lenient"  # Optional brand: plain strings stay assignable
    STRICT = "strict"  # Required brand: ids must be cast or constructed

    @classmethod
    def from_value(cls, value: Any) -> "BrandStyle":
        """Resolve a config value such as ``"strict"``; defaults to lenient."""
        if isinstance(value, BrandStyle):
            return value
        if value is None or value == "":
            return cls.LENIENT
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f"Invalid id strictness: {value!r} "
                f"(expected one of {', '.join(VALID_STRICTNESS)})"
            ) from None

    @property
    def interface_name(self) -> str:
        return "Flavoring" if self is BrandStyle.LENIENT else "Branding"

    @property
    def alias_name(self) -> str:
        return "Flavor" if self is BrandStyle.LENIENT else "Brand"

    @property
    def type_parameter(self) -> str:
        return f"{self.alias_name}T"

    @property
    def brand_optional(self) -> bool:
        return self is BrandStyle.LENIENT

    @property
    def prelude_marker(self) -> str:
        """Text proving the helper declarations are already present."""
        return f"export type {self.alias_name}<T, {self.type_parameter}>"

    def prelude_context(self) -> Dict[str, Any]:
        return {
            "interface_name": self.interface_name,
            "alias_name": self.alias_name,
            "param": self.type_parameter,
            "member": "_type",
            "optional": self.brand_optional,
        }


@dataclass(frozen=True)
class NominalType:
    """The generated identifier type of one model."""

    model: str
    style: BrandStyle = BrandStyle.LENIENT
    base_type: str = "string"

    @property
    def name(self) -> str:
        return nominal_type_name(self.model)

    @property
    def brand(self) -> str:
        return brand_key(self.model)

    @property
    def token(self) -> str:
        """Conventional camel-cased key column name, e.g. ``userId``."""
        return name_token(self.model)

    @property
    def alias_header(self) -> str:
        return f"export type {self.name} = "

    def template_context(self) -> Dict[str, Any]:
        return {
            "type_name": self.name,
            "alias_name": self.style.alias_name,
            "base_type": self.base_type,
            "brand": self.brand,
        }
