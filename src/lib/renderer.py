"""
Renderer for schema documentation pages

Renders user-supplied Jinja2 templates against an introspected schema.

Layout:
  - partials/: reusable fragments, registered by filename without extension
               (TypeRef.html -> {% include "TypeRef" %})
  - templates/: one page per file, rendered with the schema summary; the
                type template is instead rendered once per schema type
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, TemplateError

from ..config import appsettings
from ..models.schema import SchemaData
from .introspection import typeRef_format
from .log import LOG


class RenderError(RuntimeError):
    """Raised when a template or partial cannot be loaded or rendered"""
    pass


# Jinja test name -> introspection kind
KIND_TESTS: Dict[str, str] = {
    'object': 'OBJECT',
    'interface': 'INTERFACE',
    'enum': 'ENUM',
    'union': 'UNION',
    'input_object': 'INPUT_OBJECT',
    'scalar': 'SCALAR',
}


def kindTest_make(kind: str) -> Callable[[Any], bool]:
    """Build a Jinja test checking a record's introspection kind"""

    def kind_is(value: Any) -> bool:
        return isinstance(value, Mapping) and value.get('kind') == kind

    return kind_is


class Renderer:
    """
    Renders schema documentation pages from a template directory

    Responsibilities:
    - Register partials from the partials directory
    - Expose kind tests (object, enum, ...) and the type_ref filter
    - Render schema-level pages and one page per type
    - Write the output files
    """

    def __init__(
        self,
        templates_dir: str,
        partials_dir: Optional[str],
        output_dir: str,
        type_template: Optional[str] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            templates_dir: Directory of page templates
            partials_dir: Directory of partials, or None for no partials
            output_dir: Directory receiving rendered pages
            type_template: Filename in templates_dir rendered once per type
                           (default: appsettings.type_template)
        """
        self.templates_dir = Path(templates_dir)
        self.partials_dir = Path(partials_dir) if partials_dir else None
        self.output_dir = Path(output_dir)
        self.type_template = type_template or appsettings.type_template
        self.partials: Dict[str, str] = {}
        self.pages: List[str] = []

        if not self.templates_dir.is_dir():
            raise RenderError(f"Template directory not found: {self.templates_dir}")

        self.partials_register()
        self.env = self.environment_build()

    def partials_register(self) -> Dict[str, str]:
        """
        Load every partial file, keyed by its name without extension

        Returns:
            Dict mapping partial name to template source
        """
        self.partials = {}
        if self.partials_dir is None:
            return self.partials
        if not self.partials_dir.is_dir():
            raise RenderError(f"Partial directory not found: {self.partials_dir}")

        for path in sorted(self.partials_dir.iterdir()):
            name = appsettings.partialName_extract(path.name)
            if name is None or not path.is_file():
                continue
            self.partials[name] = path.read_text(encoding='utf-8')
            LOG(f"Partial added : {path}", level=2)

        return self.partials

    def environment_build(self) -> Environment:
        """Create the Jinja2 environment with loaders, tests and filters"""
        env = Environment(
            loader=ChoiceLoader([
                FileSystemLoader(str(self.templates_dir)),
                DictLoader(self.partials),
            ]),
            autoescape=True,
            keep_trailing_newline=True,
        )
        for test_name, kind in KIND_TESTS.items():
            env.tests[test_name] = kindTest_make(kind)
        env.filters['type_ref'] = typeRef_format
        return env

    def page_render(self, template_name: str, context: Mapping[str, Any], destination: Path) -> Path:
        """
        Render one template to destination

        Raises:
            RenderError: If the template fails to load or render
        """
        try:
            template = self.env.get_template(template_name)
            html = template.render(**context)
        except TemplateError as e:
            raise RenderError(f"Failed rendering template {template_name}: {e}") from e

        destination.write_text(html, encoding='utf-8')
        self.pages.append(str(destination))
        LOG(f"Template rendered : {self.templates_dir / template_name} ---> {destination}", level=1)
        return destination

    def templates_list(self) -> List[str]:
        """Schema-level page templates (every file but the type template)"""
        return sorted(
            path.name for path in self.templates_dir.iterdir()
            if path.is_file() and path.name != self.type_template
        )

    def render(self, schema: SchemaData) -> Dict[str, Any]:
        """
        Render all pages for schema

        Returns:
            dict with render results (status, page_count, pages, output_dir)

        Raises:
            RenderError: If any template fails, the type template is missing
                         while the schema has types to document, or a type
                         page would overwrite a schema page of the same name
        """
        page_templates = self.templates_list()
        documented = [
            t for t in schema.parsedTypes
            if t.get('name') and not appsettings.typeInternal_is(t['name'])
        ]
        if documented and not (self.templates_dir / self.type_template).is_file():
            raise RenderError(
                f"Type template not found: {self.templates_dir / self.type_template}"
            )

        collisions = sorted(
            set(page_templates) & {f"{t['name']}.html" for t in documented}
        )
        if collisions:
            raise RenderError(
                f"Type pages would overwrite schema pages: {', '.join(collisions)}"
            )

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pages = []

        context = schema.context_make()
        for template_name in page_templates:
            self.page_render(template_name, context, self.output_dir / template_name)

        for parsed_type in documented:
            self.page_render(
                self.type_template,
                parsed_type,
                self.output_dir / f"{parsed_type['name']}.html",
            )

        return {
            'status': True,
            'page_count': len(self.pages),
            'pages': list(self.pages),
            'output_dir': str(self.output_dir),
        }
