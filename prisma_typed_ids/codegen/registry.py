"""
Model registry for nominal identifier types.

Built in one pass over every model before any rewriting starts, so that a
foreign key can be resolved to its target's nominal type regardless of the
order in which models appear in the schema.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .core.naming import declaration_model_prefix, nominal_type_name
from .core.schema import Field, FieldRole, Model
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ForeignKey:
    """A scalar key column pointing at another model's identifier."""

    column: str
    target: str
    relation: str  # Name of the relation field listing the column


class ModelRegistry:
    """Maps models to nominal types and classifies their key fields."""

    def __init__(self, models: List[Model]):
        """
        Initialize registry from models in schema order.

        Args:
            models: Converted datamodel
        """
        self._models: Dict[str, Model] = {}
        self._identifiers: Dict[str, Field] = {}
        self._foreign_keys: Dict[str, List[ForeignKey]] = {}
        self._skipped: Dict[str, str] = {}

        for model in models:
            self._models[model.name] = model

        self._register_identifiers()
        self._register_foreign_keys()

    def _register_identifiers(self):
        for model in self._models.values():
            if model.has_compound_key:
                self._skipped[model.name] = (
                    f"compound primary key ({', '.join(model.primary_key)})"
                )
                continue

            identifier = next(
                (f for f in model.fields if f.role == FieldRole.IDENTIFIER), None
            )
            if identifier is None:
                self._skipped[model.name] = "no string field 'id' marked as identifier"
                continue

            self._identifiers[model.name] = identifier

    def _register_foreign_keys(self):
        for model in self._models.values():
            keys: List[ForeignKey] = []

            for relation in model.relation_fields:
                target_id = self._identifiers.get(relation.type)
                if target_id is None:
                    continue

                from_fields = relation.relation_from_fields
                to_fields = relation.relation_to_fields
                if not to_fields and len(from_fields) == 1:
                    to_fields = [target_id.name]

                # Only columns paired with the target's identifier get its type
                for column, to_field in zip(from_fields, to_fields):
                    if to_field != target_id.name:
                        continue
                    column_field = model.get_field(column)
                    if column_field is None or column_field.kind != "scalar":
                        logger.debug(
                            "Ignoring key column %s.%s: not a scalar field",
                            model.name,
                            column,
                        )
                        continue
                    if any(key.column == column for key in keys):
                        continue
                    keys.append(ForeignKey(column, relation.type, relation.name))

            self._foreign_keys[model.name] = keys

    @property
    def models(self) -> List[Model]:
        """All models in schema order."""
        return list(self._models.values())

    def identified_models(self) -> List[Model]:
        """Models with a qualifying identifier field, in schema order."""
        return [m for m in self._models.values() if m.name in self._identifiers]

    def is_identified(self, model_name: str) -> bool:
        return model_name in self._identifiers

    def resolve_identifier_field(self, model_name: str) -> Optional[Field]:
        """Return the model's identifier field, or None when it has none."""
        return self._identifiers.get(model_name)

    def nominal_type_name(self, model_name: str) -> Optional[str]:
        """Return the nominal type name, or None for models that get none."""
        if model_name not in self._identifiers:
            return None
        return nominal_type_name(model_name)

    def foreign_key_targets(self, model_name: str) -> List[ForeignKey]:
        """Foreign-key columns of a model whose target has a nominal type."""
        return list(self._foreign_keys.get(model_name, []))

    def foreign_key_owners(self, target: str, column: str) -> List[str]:
        """
        Identified models holding a key column with this name pointing at target.

        A column that merely shares the name is not a key to ``target`` and
        is never returned.
        """
        return [
            model_name
            for model_name, keys in self._foreign_keys.items()
            if model_name in self._identifiers
            and any(k.column == column and k.target == target for k in keys)
        ]

    def skip_reason(self, model_name: str) -> Optional[str]:
        return self._skipped.get(model_name)

    def owner_of(self, declaration_name: str) -> Optional[str]:
        """
        Resolve which model a generated declaration belongs to.

        The owner is the longest model name the declaration starts with,
        where the rest of the name begins a new word (``PostTagWhereInput``
        belongs to ``PostTag`` when both ``Post`` and ``PostTag`` exist).
        """
        name = declaration_model_prefix(declaration_name)
        best = None
        for model_name in self._models:
            if not name.startswith(model_name):
                continue
            rest = name[len(model_name):]
            if rest and not (rest[0].isupper() or rest[0].isdigit() or rest[0] == "_"):
                continue
            if best is None or len(model_name) > len(best):
                best = model_name
        return best
