"""
Base generator interface for declaration rewriting targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional

from .config import GeneratorConfig, load_config
from .schema import Model
from .templates import TemplateEngine, TemplateError, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config()
        self._template_engine = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension of the rewritten files (e.g., '.d.ts')."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine()
        return self._template_engine

    @abstractmethod
    def generate(self, models: List[Model], source: str) -> str:
        """
        Rewrite generated declarations for the given models.

        Args:
            models: Models in schema order
            source: Pre-generated declarations text

        Returns:
            Rewritten declarations text
        """
        pass

    def validate_models(self, models: List[Model]) -> List[str]:
        """
        Report models and relations that will be left untouched.

        Args:
            models: Models to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        names = {model.name for model in models}

        for model in models:
            if model.has_compound_key:
                warnings.append(
                    f"Model '{model.name}' has a compound primary key "
                    f"({', '.join(model.primary_key)}); no nominal id type generated"
                )

            for relation in model.relation_fields:
                if relation.type not in names:
                    warnings.append(
                        f"Relation {model.name}.{relation.name} references "
                        f"unknown model '{relation.type}'"
                    )

        return warnings

    def get_metadata(self) -> Dict[str, Any]:
        """Metadata about the last run, merged into the generation result."""
        return {}

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Rewritten declarations
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, models: List[Model], source: str
) -> GenerationResult:
    """
    Rewrite declarations using the specified generator with error handling.

    Args:
        generator: Generator instance
        models: Models in schema order
        source: Pre-generated declarations text

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_models(models)

        code = generator.generate(models, source)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "model_count": len(models),
            "changed": code != source,
        }
        metadata.update(generator.get_metadata())

        return GenerationResult(code, warnings, metadata)

    except (GeneratorError, TemplateError) as e:
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
