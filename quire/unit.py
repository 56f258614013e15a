"""
Template units - compiled collections of named sub-templates.

A unit pairs a Jinja2 environment with a name -> template table. The base
unit built by `TemplateEngine.load()` holds the global partials; every
render combination derives its own unit from it, adding the view, layout
and explicit partials to a private overlay. Inherited templates are
rebuilt from the parent's compiled code against the derived environment,
never re-parsed, so `{% include %}` in a global partial sees the whole
derived table.
"""

from collections import ChainMap
from types import CodeType
from typing import Any, Dict, Iterator, List, Mapping, Optional, TextIO

from jinja2 import BaseLoader, Environment, Template, TemplateNotFound
from jinja2.sandbox import SandboxedEnvironment

from .builtins import bind_builtins
from .context import to_mapping
from .options import TemplateOptions


VIEW_PREFIX = "view::"
LAYOUT_PREFIX = "layout::"


class UnitLoader(BaseLoader):
    """
    Jinja2 loader serving already-compiled templates from a unit table.

    Lets `{% include %}` and `{% extends %}` tags resolve the same names
    as the `include`/`require` built-ins.
    """

    def __init__(self, templates: Mapping[str, Template]):
        self.templates = templates

    def get_source(self, environment: Environment, template: str):
        raise TemplateNotFound(template)

    def load(self, environment: Environment, name: str, globals=None) -> Template:
        try:
            return self.templates[name]
        except KeyError:
            raise TemplateNotFound(name) from None

    def list_templates(self) -> List[str]:
        return sorted(self.templates)


def create_environment(options: TemplateOptions) -> Environment:
    """
    Create the Jinja2 environment for a base unit.

    Jinja's own template cache is disabled: the unit table is the only
    place compiled templates live.
    """
    env_class = SandboxedEnvironment if options.sandbox else Environment
    env = env_class(
        variable_start_string=options.left_delim,
        variable_end_string=options.right_delim,
        autoescape=options.autoescape,
        cache_size=0,
    )
    env.globals.update(options.functions)
    return env


class TemplateUnit:
    """
    Compiled unit: environment plus sub-template table.

    A derived unit gets its own overlay environment and instantiates the
    parent's templates from their compiled code against it, so every tag
    inside an inherited partial resolves through the derived unit's table.

    Args:
        environment: Environment templates are compiled against
        shared: Compiled code of a parent unit's templates, by name
    """

    def __init__(self, environment: Environment, shared: Optional[Mapping[str, CodeType]] = None):
        self._own: Dict[str, Template] = {}
        self._own_code: Dict[str, CodeType] = {}

        if shared is None:
            self.environment = environment
            inherited: Dict[str, Template] = {}
            self.code = ChainMap(self._own_code)
        else:
            self.environment = environment.overlay()
            inherited = {name: self._instantiate(code) for name, code in shared.items()}
            self.code = ChainMap(self._own_code, shared)

        self.templates = ChainMap(self._own, inherited)
        self.environment.loader = UnitLoader(self.templates)

    @classmethod
    def base(cls, options: TemplateOptions) -> "TemplateUnit":
        return cls(create_environment(options))

    def derive(self) -> "TemplateUnit":
        """New unit inheriting this unit's templates, with an empty overlay."""
        return TemplateUnit(self.environment, shared=self.code)

    def parse(self, name: str, source: str) -> Template:
        """
        Compile `source` and register it as `name`.

        Raises:
            jinja2.TemplateSyntaxError: If the source is malformed
        """
        code = self.environment.compile(source, name=name, filename=name)
        template = self._instantiate(code)
        self._own_code[name] = code
        self._own[name] = template
        return template

    def _instantiate(self, code: CodeType) -> Template:
        env = self.environment
        return env.template_class.from_code(env, code, env.make_globals(None))

    def lookup(self, name: str) -> Optional[Template]:
        return self.templates.get(name)

    def names(self) -> List[str]:
        return sorted(self.templates)

    def context(self, data: Any = None, child: Optional[str] = None) -> dict:
        """Template variables for one execution: data plus built-ins."""
        variables = to_mapping(data)
        variables.update(bind_builtins(self, child))
        return variables

    def render(self, name: str, data: Any = None, child: Optional[str] = None) -> str:
        """Execute sub-template `name` and return its output."""
        return self._get(name).render(self.context(data, child))

    def stream(
        self,
        writer: TextIO,
        name: str,
        data: Any = None,
        child: Optional[str] = None,
    ) -> None:
        """Execute sub-template `name`, writing output chunks to `writer`."""
        for chunk in self._get(name).generate(self.context(data, child)):
            writer.write(chunk)

    def _get(self, name: str) -> Template:
        template = self.templates.get(name)
        if template is None:
            raise TemplateNotFound(name)
        return template

    def __contains__(self, name: str) -> bool:
        return name in self.templates

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self.templates)
