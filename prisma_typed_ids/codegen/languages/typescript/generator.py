"""
TypeScript identifier typing generator.

Rewrites generated client declarations so that primary keys and the
foreign keys referencing them use per-model nominal types instead of
``string``.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.schema import Model
from ...registry import ModelRegistry
from ....logging_config import get_logger
from .buffer import DECLARATION_HEADER_RE, DeclarationBuffer
from .patterns import field_rewrite
from .types import BrandStyle, NominalType

logger = get_logger(__name__)


def primary_header(model_name: str) -> str:
    """Exact text introducing a model's primary declaration."""
    return f"export type {model_name} = "


def payload_header(model_name: str) -> re.Pattern:
    return re.compile(r"\btype \$?" + re.escape(model_name) + r"Payload<")


def where_header(model_name: str) -> re.Pattern:
    return re.compile(r"\btype " + re.escape(model_name) + r"WhereInput = ")


def where_unique_header(model_name: str) -> re.Pattern:
    return re.compile(r"\btype " + re.escape(model_name) + r"WhereUniqueInput = ")


def mutation_input_header(model_name: str) -> re.Pattern:
    """Create/update inputs: UserCreateInput, UserUncheckedUpdateManyInput, ..."""
    return re.compile(
        r"\btype (?P<name>" + re.escape(model_name)
        + r"(?:Unchecked)?(?:Create|Update)(?:Many|ManyMutation)?Input) = "
    )


def without_relation_header(model_name: str) -> re.Pattern:
    """Relation-exclusion variants: UserCreateWithoutPostsInput, ..."""
    return re.compile(
        r"\btype (?P<name>" + re.escape(model_name)
        + r"(?:Unchecked)?(?:Create|Update)(?:Many)?Without\w+Input) = "
    )


@dataclass
class RewriteStats:
    """What one run changed."""

    retyped_fields: int = 0
    nominal_types: List[str] = field(default_factory=list)
    skipped_models: Dict[str, str] = field(default_factory=dict)
    missing_declarations: List[str] = field(default_factory=list)
    prelude_added: bool = False


class TypeScriptIdGenerator(CodeGenerator):
    """Injects nominal id types into generated TypeScript declarations."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        style: Optional[BrandStyle] = None,
    ):
        super().__init__(config)
        # Fixed for the lifetime of the generator
        self.style = style or BrandStyle.from_value(self.config.id_strictness)
        self.extended = self.config.extended
        self.stats = RewriteStats()

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".d.ts"

    def get_metadata(self) -> Dict[str, Any]:
        return {
            "id_strictness": self.style.value,
            "extended": self.extended,
            "retyped_fields": self.stats.retyped_fields,
            "nominal_types": list(self.stats.nominal_types),
            "skipped_models": dict(self.stats.skipped_models),
            "prelude_added": self.stats.prelude_added,
        }

    def generate(self, models: List[Model], source: str) -> str:
        """Rewrite the declarations, one model at a time in schema order."""
        self.stats = RewriteStats()
        registry = ModelRegistry(models)
        buffer = DeclarationBuffer(source)

        self._inject_prelude(buffer)

        available = self._available_models(registry, buffer)

        for model in registry.models:
            if model.name not in available:
                continue
            self._process_model(buffer, registry, model, available)

        logger.info(
            "Retyped %d field(s) across %d model(s)",
            self.stats.retyped_fields,
            len(self.stats.nominal_types),
        )
        return buffer.text

    def _inject_prelude(self, buffer: DeclarationBuffer):
        if buffer.contains(self.style.prelude_marker):
            logger.debug("Brand helper declarations already present")
            return
        prelude = self.render_template("brand_prelude", self.style.prelude_context())
        buffer.prepend(prelude)
        self.stats.prelude_added = True

    def _available_models(
        self, registry: ModelRegistry, buffer: DeclarationBuffer
    ) -> Set[str]:
        """Identified models whose nominal type can actually be declared."""
        available = set()
        for model in registry.models:
            reason = registry.skip_reason(model.name)
            if reason is None:
                nominal = NominalType(model.name, self.style)
                if buffer.contains(primary_header(model.name)) or buffer.contains(
                    nominal.alias_header
                ):
                    available.add(model.name)
                    continue
                reason = f"declaration '{primary_header(model.name).strip()}' not found"

            self.stats.skipped_models[model.name] = reason
            logger.info("Skipping model %s: %s", model.name, reason)
        return available

    def _process_model(
        self,
        buffer: DeclarationBuffer,
        registry: ModelRegistry,
        model: Model,
        available: Set[str],
    ):
        nominal = NominalType(model.name, self.style)
        id_field = registry.resolve_identifier_field(model.name)
        logger.info("Processing model %s -> %s", model.name, nominal.name)

        self._insert_alias(buffer, nominal)
        self.stats.nominal_types.append(nominal.name)

        own_id = field_rewrite(id_field.name, nominal.name)

        self._rewrite(buffer, payload_header(model.name), own_id, f"{model.name} payload")

        for owner in registry.foreign_key_owners(model.name, nominal.token):
            self._rewrite_owned(buffer, registry, owner, nominal.token, nominal.name)

        self._rewrite(buffer, where_header(model.name), own_id, f"{model.name}WhereInput")
        self._rewrite(
            buffer, where_unique_header(model.name), own_id, f"{model.name}WhereUniqueInput"
        )

        if self.extended:
            self.stats.retyped_fields += buffer.rewrite_all(
                mutation_input_header(model.name), own_id
            )
            self.stats.retyped_fields += buffer.rewrite_all(
                without_relation_header(model.name), own_id
            )

        for key in registry.foreign_key_targets(model.name):
            if key.target not in available:
                logger.debug(
                    "Leaving %s.%s as string: %s has no nominal type",
                    model.name,
                    key.column,
                    key.target,
                )
                continue
            target_type = NominalType(key.target, self.style).name
            self._rewrite(
                buffer,
                payload_header(model.name),
                field_rewrite(key.column, target_type),
                f"{model.name} payload",
            )
            self._rewrite_owned(buffer, registry, model.name, key.column, target_type)

    def _insert_alias(self, buffer: DeclarationBuffer, nominal: NominalType):
        if buffer.contains(nominal.alias_header):
            return
        alias = self.render_template("nominal_alias", nominal.template_context())
        # Anchored on header text, not on a stored offset
        buffer.insert_before(primary_header(nominal.model), alias)

    def _rewrite(self, buffer: DeclarationBuffer, header, rewrite, label: str):
        count = buffer.rewrite_region(header, rewrite)
        if count is None:
            logger.debug("Declaration not found: %s", label)
            if label not in self.stats.missing_declarations:
                self.stats.missing_declarations.append(label)
            return
        self.stats.retyped_fields += count

    def _rewrite_owned(
        self,
        buffer: DeclarationBuffer,
        registry: ModelRegistry,
        owner: str,
        column: str,
        nominal_name: str,
    ):
        """Retype a key column in every declaration generated for its owner."""
        self.stats.retyped_fields += buffer.rewrite_all(
            DECLARATION_HEADER_RE,
            field_rewrite(column, nominal_name),
            name_filter=lambda name: registry.owner_of(name) == owner,
        )
