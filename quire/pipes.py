"""
Helper pipes - optional template functions.

Each `with_*_pipe()` returns an option registering one function:

    {{ uuid() }}
    {{ iif(user.is_admin, "YES", "NO") }}
    {{ number_fmt("%d $", 1000000) }}            -> 1,000,000 $
    {{ regexp_fmt("123456", "(\\d{2})(\\d{3})(\\d{1})", "($1) $2-$3") }}
    {{ to_json(user) }}
    {{ include("@partials/card", dict("title", page.title)) }}
    {% if is_set(meta, "title") %}...{% endif %}
    {{ alter(meta.title, "Greeting") }}
    {{ deep_alter(meta.title, "Greeting") }}
    {{ br(comment) }}
"""

import json
import re
import uuid
from numbers import Number
from typing import Any, Callable, Dict, Mapping

from jinja2 import Undefined
from markupsafe import Markup, escape

from .options import Option, with_function


_VERB = re.compile(r"%[-+# 0-9.]*[dfvsg]")
_GROUP_REF = re.compile(r"\$\{?(\w+)\}?")


def new_uuid() -> str:
    return str(uuid.uuid4())


def iif(cond: Any, yes: Any, no: Any) -> Any:
    """Ternary: `yes` when `cond` is truthy, otherwise `no`."""
    return yes if cond else no


def _group_number(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, Number):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def number_fmt(layout: str, *values: Any) -> str:
    """
    Fill printf-style verbs in `layout` with thousands-grouped numbers.

    Verbs without a matching value are left untouched.
    """
    formatted = iter([_group_number(v) for v in values])

    def fill(match: "re.Match[str]") -> str:
        return next(formatted, match.group(0))

    return _VERB.sub(fill, layout)


def regexp_fmt(data: str, pattern: str, repl: str) -> str:
    """
    Rewrite `data` with `pattern`, referring to groups as $1 or ${name}.

    Raises:
        re.error: If `pattern` is not a valid expression
    """
    rx = re.compile(pattern)
    return rx.sub(_GROUP_REF.sub(r"\\g<\1>", repl), data)


def to_json(data: Any) -> str:
    return json.dumps(data, default=str)


def make_dict(*pairs: Any, **kwargs: Any) -> Dict[str, Any]:
    """
    Build a mapping from alternating keys and values.

    Raises:
        ValueError: On an odd number of arguments or a non-string key
    """
    if len(pairs) % 2 != 0:
        raise ValueError("invalid number of arguments passed to dict function")

    result: Dict[str, Any] = {}
    for i in range(0, len(pairs), 2):
        key = pairs[i]
        if not isinstance(key, str):
            raise ValueError("dict keys must be strings")
        result[key] = pairs[i + 1]
    result.update(kwargs)
    return result


def is_set(data: Any, key: str) -> bool:
    return isinstance(data, Mapping) and key in data


def _missing(value: Any) -> bool:
    return value is None or isinstance(value, Undefined)


def alter(value: Any, alt: Any) -> Any:
    """`alt` when `value` is None or undefined."""
    return alt if _missing(value) else value


def deep_alter(value: Any, alt: Any) -> Any:
    """`alt` when `value` is None, undefined, empty or zero."""
    if _missing(value):
        return alt
    if isinstance(value, bool):
        return value
    if isinstance(value, Number):
        return alt if value == 0 else value
    if hasattr(value, "__len__"):
        return alt if len(value) == 0 else value
    return value


def br(text: str) -> Markup:
    """HTML-escape `text` and turn newlines into <br/> tags."""
    return Markup(str(escape(text)).replace("\n", "<br/>"))


def _pipe(name: str, fn: Callable[..., Any]) -> Callable[[], Option]:
    def factory() -> Option:
        return with_function(name, fn)
    factory.__name__ = f"with_{name}_pipe"
    factory.__doc__ = f"Register the `{name}` template function."
    return factory


with_uuid_pipe = _pipe("uuid", new_uuid)
with_ternary_pipe = _pipe("iif", iif)
with_number_fmt_pipe = _pipe("number_fmt", number_fmt)
with_regexp_fmt_pipe = _pipe("regexp_fmt", regexp_fmt)
with_json_pipe = _pipe("to_json", to_json)
with_dict_pipe = _pipe("dict", make_dict)
with_is_set_pipe = _pipe("is_set", is_set)
with_alter_pipe = _pipe("alter", alter)
with_deep_alter_pipe = _pipe("deep_alter", deep_alter)
with_br_pipe = _pipe("br", br)


# Pipe name -> option factory, used by configuration files
PIPES: Dict[str, Callable[[], Option]] = {
    "uuid": with_uuid_pipe,
    "iif": with_ternary_pipe,
    "number_fmt": with_number_fmt_pipe,
    "regexp_fmt": with_regexp_fmt_pipe,
    "to_json": with_json_pipe,
    "dict": with_dict_pipe,
    "is_set": with_is_set_pipe,
    "alter": with_alter_pipe,
    "deep_alter": with_deep_alter_pipe,
    "br": with_br_pipe,
}
