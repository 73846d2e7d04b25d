"""
Core schema representation for identifier typing.

Converts the Prisma DMMF datamodel into a normalized internal format
that the registry and the rewrite engine work with consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum

from .naming import is_valid_identifier
from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(Exception):
    """Exception raised for malformed schema descriptions."""

    pass


class FieldRole(Enum):
    """Role a field plays for identifier typing."""

    IDENTIFIER = "identifier"  # Single scalar primary key
    FOREIGN_KEY = "foreign_key"  # Scalar column backing a relation
    OTHER = "other"


@dataclass(frozen=True)
class Field:
    """Represents a single field of a model."""

    name: str
    kind: str = "scalar"  # scalar, object, enum, unsupported
    type: Optional[str] = None
    is_id: bool = False
    role: FieldRole = FieldRole.OTHER

    # Set on foreign-key columns: the model the column points at
    references: Optional[str] = None

    # Set on relation fields (kind == "object")
    relation_from_fields: List[str] = field(default_factory=list)
    relation_to_fields: List[str] = field(default_factory=list)

    @property
    def is_relation(self) -> bool:
        """Whether this field is a relation to another model."""
        return self.kind == "object"

    @property
    def owns_foreign_key(self) -> bool:
        """Whether the scalar key columns of this relation live on this side."""
        return self.is_relation and bool(self.relation_from_fields)


@dataclass(frozen=True)
class Model:
    """Represents one model of the datamodel, fields in schema order."""

    name: str
    fields: List[Field] = field(default_factory=list)
    primary_key: List[str] = field(default_factory=list)  # Compound key columns

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for model_field in self.fields:
            if model_field.name == name:
                return model_field
        return None

    @property
    def has_compound_key(self) -> bool:
        return len(self.primary_key) > 1

    @property
    def relation_fields(self) -> List[Field]:
        return [f for f in self.fields if f.owns_foreign_key]


def _qualifies_as_identifier(raw_field: Dict[str, Any]) -> bool:
    """Only a scalar string field named ``id`` flagged as the key qualifies."""
    if raw_field.get("name") != "id" or not raw_field.get("isId", False):
        return False
    if raw_field.get("kind", "scalar") != "scalar":
        return False
    field_type = raw_field.get("type")
    return field_type is None or field_type == "String"


def _extract_models(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Accept both the full DMMF document and its bare datamodel."""
    if not isinstance(document, dict):
        raise SchemaError(
            f"Schema description must be a JSON object, got {type(document).__name__}"
        )

    datamodel = document.get("datamodel", document)
    if not isinstance(datamodel, dict):
        raise SchemaError("'datamodel' must be a JSON object")

    models = datamodel.get("models")
    if not isinstance(models, list):
        raise SchemaError("Schema description has no 'models' list")

    return models


def convert_datamodel(document: Dict[str, Any]) -> List[Model]:
    """
    Convert a DMMF datamodel into Model objects.

    Foreign-key roles are assigned in a second pass, since a column is only
    known to be a key once the relation field that lists it has been seen.

    Args:
        document: Full DMMF document or its ``datamodel`` member

    Returns:
        Models in schema order

    Raises:
        SchemaError: If the document does not describe models
    """
    raw_models = _extract_models(document)

    converted: List[Model] = []
    for raw_model in raw_models:
        if not isinstance(raw_model, dict) or not raw_model.get("name"):
            raise SchemaError(f"Model entry without a name: {raw_model!r}")

        model_name = raw_model["name"]
        if not is_valid_identifier(model_name):
            raise SchemaError(f"Model name is not a valid identifier: {model_name!r}")
        raw_fields = raw_model.get("fields") or []

        primary_key = []
        if isinstance(raw_model.get("primaryKey"), dict):
            primary_key = list(raw_model["primaryKey"].get("fields") or [])

        # Map key column -> referenced model from this model's relations
        key_columns: Dict[str, str] = {}
        for raw_field in raw_fields:
            if raw_field.get("kind") != "object":
                continue
            for column in raw_field.get("relationFromFields") or []:
                key_columns.setdefault(column, raw_field.get("type"))

        fields = []
        for raw_field in raw_fields:
            if not raw_field.get("name"):
                raise SchemaError(f"Field without a name in model {model_name}")

            name = raw_field["name"]
            role = FieldRole.OTHER
            references = None

            if not primary_key and _qualifies_as_identifier(raw_field):
                role = FieldRole.IDENTIFIER
            elif name in key_columns and raw_field.get("kind", "scalar") == "scalar":
                role = FieldRole.FOREIGN_KEY
                references = key_columns[name]

            fields.append(
                Field(
                    name=name,
                    kind=raw_field.get("kind", "scalar"),
                    type=raw_field.get("type"),
                    is_id=bool(raw_field.get("isId", False)),
                    role=role,
                    references=references,
                    relation_from_fields=list(raw_field.get("relationFromFields") or []),
                    relation_to_fields=list(raw_field.get("relationToFields") or []),
                )
            )

        converted.append(Model(name=model_name, fields=fields, primary_key=primary_key))

    logger.debug("Converted %d models from datamodel", len(converted))
    return converted
