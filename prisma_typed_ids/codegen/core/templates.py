"""
Template engine wrapper for declaration generation.

Provides a simple interface for Jinja2 template rendering of the
brand helper prelude and the per-model nominal type aliases.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    ChoiceLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._memory_loader = DictLoader({})
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        # In-memory templates take precedence over files
        if self.template_dir and self.template_dir.exists():
            loader = ChoiceLoader(
                [self._memory_loader, FileSystemLoader(str(self.template_dir))]
            )
        else:
            loader = self._memory_loader

        # TypeScript output, so no HTML escaping; whitespace is significant
        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters["ts_string"] = self._ts_string_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render a template string with the given context."""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._memory_loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template is available."""
        return template_name in self._env.list_templates()

    # Template filters

    def _ts_string_filter(self, value: str) -> str:
        """Quote a value as a single-quoted TypeScript string literal."""
        escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"


# Helper declarations prepended once per file. The lenient helper leaves the
# brand member optional so any string stays assignable; the strict one makes
# it mandatory.
BRAND_PRELUDE_TEMPLATE = """
export interface {{ interface_name }}<{{ param }}> {
  {{ member }}{% if optional %}?{% endif %}: {{ param }}
}
export type {{ alias_name }}<T, {{ param }}> = T & {{ interface_name }}<{{ param }}>
"""

NOMINAL_ALIAS_TEMPLATE = """
export type {{ type_name }} = {{ alias_name }}<{{ base_type }}, {{ brand | ts_string }}>
"""


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine preloaded with the built-in templates."""
    engine = TemplateEngine(template_dir)
    if not engine.template_exists("brand_prelude"):
        engine.add_template("brand_prelude", BRAND_PRELUDE_TEMPLATE)
    if not engine.template_exists("nominal_alias"):
        engine.add_template("nominal_alias", NOMINAL_ALIAS_TEMPLATE)
    return engine
