"""Template engine facade over parsing, lookup and resolution."""

from typing import Dict, Any, List, Optional, Set

from .classifier import parse_template
from .resolver import Resolver
from .types import Template
from ..core.types import DictPromptLookup, PromptLookup
from ..core.exceptions import PromptNotFoundError


class OverlayLookup:
    """Lookup that consults registered templates before a fallback lookup."""

    def __init__(self, templates: Dict[str, str], fallback: Optional[PromptLookup] = None):
        self.templates = templates
        self.fallback = fallback

    def resolve(self, name: str) -> Optional[str]:
        if name in self.templates:
            return self.templates[name]
        if self.fallback is not None:
            return self.fallback.resolve(name)
        return None


class TemplateEngine:
    """
    Prompt template engine.

    Renders template text or named prompts, with support for
    in-process templates layered over a storage lookup.

    Example:
        >>> engine = TemplateEngine(custom_templates={"greeting": "Hello, {{name}}!"})
        >>> engine.render("greeting", name="Alice")
        'Hello, Alice!'
        >>> engine.render_string("{{prompt:greeting}} Bye.", {"name": "Bob"})
        'Hello, Bob! Bye.'
    """

    def __init__(
        self,
        lookup: Optional[PromptLookup] = None,
        custom_templates: Optional[Dict[str, str]] = None,
        max_depth: Optional[int] = None
    ):
        """
        Initialize the template engine.

        Args:
            lookup: Source of stored prompts (e.g. a storage backend)
            custom_templates: Dictionary of prompt_name -> template_content
            max_depth: Composition nesting limit (defaults to PREN_MAX_DEPTH)
        """
        self.custom_templates: Dict[str, str] = dict(custom_templates or {})
        self.lookup = OverlayLookup(self.custom_templates, lookup)
        self.resolver = Resolver(self.lookup, max_depth=max_depth)

    @property
    def max_depth(self) -> int:
        return self.resolver.max_depth

    def parse(self, template_string: str) -> Template:
        """Parse template text without rendering it."""
        return parse_template(template_string)

    def render(
        self,
        template_name: str,
        variables: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> str:
        """
        Render a named prompt with the given variables.

        Args:
            template_name: Name of a registered or stored prompt
            variables: Dictionary of template variables
            **kwargs: Additional variables as keyword arguments

        Returns:
            Rendered prompt string
        """
        all_vars = {**(variables or {}), **kwargs}
        return self.resolver.render_prompt(template_name, all_vars)

    def render_string(self, template_string: str, variables: Optional[Dict[str, Any]] = None, **kwargs) -> str:
        """
        Render a template from a string.

        Args:
            template_string: The template content as a string
            variables: Dictionary of template variables
            **kwargs: Additional variables as keyword arguments

        Returns:
            Rendered prompt string
        """
        all_vars = {**(variables or {}), **kwargs}
        return self.resolver.render(template_string, all_vars)

    def add_template(self, name: str, content: str) -> None:
        """
        Register an in-process template, shadowing any stored prompt of the same name.

        Raises:
            TemplateSyntaxError: If the content does not parse
        """
        parse_template(content)
        self.custom_templates[name] = content

    def get_source(self, template_name: str) -> str:
        """Get the raw template text for a prompt name."""
        source = self.lookup.resolve(template_name)
        if source is None:
            raise PromptNotFoundError(template_name)
        return source

    def list_templates(self) -> List[Dict[str, Any]]:
        """List registered in-process templates with their introspection info."""
        return [self.get_template_info(name) for name in sorted(self.custom_templates)]

    def get_template_info(self, template_name: str) -> Dict[str, Any]:
        """Get detailed information about a specific prompt."""
        template = parse_template(self.get_source(template_name))
        return {
            "name": template_name,
            "arguments": template.arguments(),
            "prompt_references": template.prompt_references(),
            "prompt_var_references": template.prompt_var_references(),
            "is_simple": template.is_simple,
        }

    def required_variables(self, template_name: str) -> List[str]:
        """
        Collect the arguments a prompt needs across its static composition tree.

        Dynamic (prompt_var) references contribute the selecting variable
        only; their targets are unknown until render time. Each prompt is
        visited once, so cyclic trees terminate here and fail at render.
        """
        required: List[str] = []
        visited: Set[str] = set()

        def visit(name: str) -> None:
            if name in visited:
                return
            visited.add(name)
            template = parse_template(self.get_source(name))
            for var in template.arguments() + template.prompt_var_references():
                if var not in required:
                    required.append(var)
            for ref in template.prompt_references():
                visit(ref)

        visit(template_name)
        return required

    def validate_variables(self, template_name: str, variables: Dict[str, Any]) -> List[str]:
        """
        Validate that all required variables are provided.

        Args:
            template_name: Prompt to validate against
            variables: Variables to check

        Returns:
            List of missing required variable names
        """
        return [v for v in self.required_variables(template_name) if v not in variables]


def create_engine(prompts: Optional[Dict[str, str]] = None, **kwargs) -> TemplateEngine:
    """Create an engine over a plain name -> template mapping."""
    return TemplateEngine(lookup=DictPromptLookup(prompts), **kwargs)
