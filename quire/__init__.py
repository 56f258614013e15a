"""
Quire - server-side document composition on Jinja2.

A document is rendered from a view, an optional layout wrapping it, and
partials that are either preloaded from a partials directory or attached
per render call. Compiled combinations are cached by view + layout +
partials so repeated renders skip compilation.

Example:
    from quire import TemplateEngine, DirectoryStore, with_root, with_partials

    engine = TemplateEngine(
        DirectoryStore("./assets"),
        with_root("views"),
        with_partials("views/partials"),
    )
    engine.load()

    html = engine.compile("pages/home", "layout", {"title": "Hi"})

Inside templates:
    {{ view() }}                          child output, in a layout
    {% if exists("@partials/nav") %}      sub-template check
    {{ include("@partials/nav", data) }}  optional sub-template
    {{ require("components/card") }}      mandatory sub-template
"""

__version__ = "0.1.0"

from .engine import TemplateEngine, RenderRequest
from .store import FileStore, DirectoryStore, MemoryStore
from .context import TemplateContext, to_mapping
from .cache import RenderCache, CacheStats, build_cache_key
from .guard import PartialGuard, PARTIALS_NAMESPACE
from .unit import TemplateUnit, VIEW_PREFIX, LAYOUT_PREFIX
from .paths import normalize_path, to_name, to_path
from .options import (
    Option,
    TemplateOptions,
    build_options,
    with_root,
    with_partials,
    with_extension,
    with_delimiters,
    with_dev,
    with_cache,
    with_autoescape,
    with_sandbox,
    with_encoding,
    with_function,
    with_functions,
)
from .pipes import (
    PIPES,
    with_uuid_pipe,
    with_ternary_pipe,
    with_number_fmt_pipe,
    with_regexp_fmt_pipe,
    with_json_pipe,
    with_dict_pipe,
    with_is_set_pipe,
    with_alter_pipe,
    with_deep_alter_pipe,
    with_br_pipe,
)
from .config import load_options
from .faults import (
    Fault,
    TemplateFault,
    TemplateNotFoundFault,
    CompositionFault,
    PartialViewFault,
    PartialLayoutFault,
    PartialAlreadyLoadedFault,
    ViewNotBoundFault,
    TemplateMissingFault,
    ConfigInvalidFault,
)

__all__ = [
    # Core
    "TemplateEngine",
    "RenderRequest",
    "TemplateUnit",
    "VIEW_PREFIX",
    "LAYOUT_PREFIX",

    # Stores
    "FileStore",
    "DirectoryStore",
    "MemoryStore",

    # Context
    "TemplateContext",
    "to_mapping",

    # Cache
    "RenderCache",
    "CacheStats",
    "build_cache_key",

    # Paths & guard
    "PartialGuard",
    "PARTIALS_NAMESPACE",
    "normalize_path",
    "to_name",
    "to_path",

    # Options
    "Option",
    "TemplateOptions",
    "build_options",
    "load_options",
    "with_root",
    "with_partials",
    "with_extension",
    "with_delimiters",
    "with_dev",
    "with_cache",
    "with_autoescape",
    "with_sandbox",
    "with_encoding",
    "with_function",
    "with_functions",

    # Pipes
    "PIPES",
    "with_uuid_pipe",
    "with_ternary_pipe",
    "with_number_fmt_pipe",
    "with_regexp_fmt_pipe",
    "with_json_pipe",
    "with_dict_pipe",
    "with_is_set_pipe",
    "with_alter_pipe",
    "with_deep_alter_pipe",
    "with_br_pipe",

    # Faults
    "Fault",
    "TemplateFault",
    "TemplateNotFoundFault",
    "CompositionFault",
    "PartialViewFault",
    "PartialLayoutFault",
    "PartialAlreadyLoadedFault",
    "ViewNotBoundFault",
    "TemplateMissingFault",
    "ConfigInvalidFault",
]
