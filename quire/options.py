"""
Engine options - immutable configuration plus option functions.

Options are plain callables applied in order to a `TemplateOptions`
value; later options override earlier ones for the same field.

Example:
    >>> engine = TemplateEngine(
    ...     DirectoryStore("./assets"),
    ...     with_root("views"),
    ...     with_partials("views/partials"),
    ...     with_cache(),
    ... )
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

from .paths import normalize_path


@dataclass(frozen=True)
class TemplateOptions:
    """
    Template engine configuration.

    Attributes:
        root: Views root inside the store ("" = store root)
        partials: Global partials root inside the store ("" = none)
        extension: Template file extension
        left_delim: Opening delimiter for expressions
        right_delim: Closing delimiter for expressions
        dev: Reload templates on every render, never cache
        cache: Keep compiled units between renders
        autoescape: HTML-escape expression output
        sandbox: Execute templates in Jinja2's sandbox
        encoding: Encoding of template files
        functions: Custom template functions by name
    """

    root: str = ""
    partials: str = ""
    extension: str = ".tpl"
    left_delim: str = "{{"
    right_delim: str = "}}"
    dev: bool = False
    cache: bool = False
    autoescape: bool = True
    sandbox: bool = False
    encoding: str = "utf-8"
    functions: Mapping[str, Callable[..., Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def apply(self, *options: "Option") -> "TemplateOptions":
        """Return a copy with `options` applied in order."""
        result = self
        for option in options:
            result = option(result)
        return result


Option = Callable[[TemplateOptions], TemplateOptions]


def build_options(*options: Option) -> TemplateOptions:
    """Apply `options` to the defaults."""
    return TemplateOptions().apply(*options)


def with_root(root: str) -> Option:
    """Set the views root. "" or "." means the store root."""
    root = normalize_path(root)

    def option(opts: TemplateOptions) -> TemplateOptions:
        return replace(opts, root=root)
    return option


def with_partials(path: str) -> Option:
    """Set the directory whose templates are loaded as global partials."""
    path = normalize_path(path)

    def option(opts: TemplateOptions) -> TemplateOptions:
        if not path:
            return opts
        return replace(opts, partials=path)
    return option


def with_extension(ext: str) -> Option:
    """Set the template file extension. The default is ".tpl"."""
    ext = ext.strip()
    if ext and not ext.startswith("."):
        ext = "." + ext

    def option(opts: TemplateOptions) -> TemplateOptions:
        if not ext:
            return opts
        return replace(opts, extension=ext)
    return option


# Jinja2 block and comment markers; expression delimiters must differ from them
_RESERVED_MARKERS = ("{%", "%}", "{#", "#}")


def with_delimiters(left: str, right: str) -> Option:
    """
    Set the expression delimiters. The default is "{{" and "}}".

    Only expression markers change: block tags stay `{% %}` and comments
    stay `{# #}`.

    Raises:
        ValueError: If either delimiter is a block or comment marker
    """
    left = left.strip()
    right = right.strip()
    for delim in (left, right):
        if delim in _RESERVED_MARKERS:
            raise ValueError(f"delimiter {delim!r} clashes with Jinja2 block or comment syntax")

    def option(opts: TemplateOptions) -> TemplateOptions:
        if not left or not right:
            return opts
        return replace(opts, left_delim=left, right_delim=right)
    return option


def with_dev(enabled: bool = True) -> Option:
    """
    Toggle development mode.

    In development mode templates are reloaded on every render and nothing
    is cached. Do not enable it in production.
    """
    def option(opts: TemplateOptions) -> TemplateOptions:
        return replace(opts, dev=enabled)
    return option


def with_cache(enabled: bool = True) -> Option:
    """Toggle the compiled-unit cache. Disabled by default."""
    def option(opts: TemplateOptions) -> TemplateOptions:
        return replace(opts, cache=enabled)
    return option


def with_autoescape(enabled: bool = True) -> Option:
    def option(opts: TemplateOptions) -> TemplateOptions:
        return replace(opts, autoescape=enabled)
    return option


def with_sandbox(enabled: bool = True) -> Option:
    """Run templates inside jinja2.sandbox.SandboxedEnvironment."""
    def option(opts: TemplateOptions) -> TemplateOptions:
        return replace(opts, sandbox=enabled)
    return option


def with_encoding(encoding: str) -> Option:
    encoding = encoding.strip()

    def option(opts: TemplateOptions) -> TemplateOptions:
        if not encoding:
            return opts
        return replace(opts, encoding=encoding)
    return option


def with_function(name: str, fn: Callable[..., Any]) -> Option:
    """Register a custom template function under `name`."""
    name = name.strip()

    def option(opts: TemplateOptions) -> TemplateOptions:
        if not name or fn is None:
            return opts
        functions: Dict[str, Callable[..., Any]] = dict(opts.functions)
        functions[name] = fn
        return replace(opts, functions=MappingProxyType(functions))
    return option


def with_functions(functions: Mapping[str, Callable[..., Any]]) -> Option:
    """Register several custom template functions at once."""
    def option(opts: TemplateOptions) -> TemplateOptions:
        for name, fn in functions.items():
            opts = with_function(name, fn)(opts)
        return opts
    return option
