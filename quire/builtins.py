"""
Built-in template functions available in every compiled unit.

    view()                 rendered child output, inside a layout
    exists(name)           whether the unit defines `name`
    include(name, data?)   render `name`, or nothing if it is missing
    require(name, data?)   render `name`, fail if it is missing

The functions are built per execution and close over the unit being
executed and the child output of that execution. Nothing is stored on the
unit, so one unit can serve concurrent renders with different children.
"""

from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from markupsafe import Markup

from .faults import TemplateMissingFault, ViewNotBoundFault

if TYPE_CHECKING:
    from .unit import TemplateUnit


BUILTIN_NAMES = ("view", "exists", "include", "require")


def bind_builtins(unit: "TemplateUnit", child: Optional[str] = None) -> Dict[str, Callable[..., Any]]:
    """
    Create the built-in functions for one execution of `unit`.

    Args:
        unit: Unit whose sub-templates `exists`/`include`/`require` see
        child: Rendered child markup, or None outside a layout pass

    Returns:
        Mapping of built-in name to callable
    """

    def view() -> Markup:
        if child is None:
            raise ViewNotBoundFault()
        return Markup(child)

    def exists(name: str) -> bool:
        return name in unit

    def include(name: str, data: Any = None) -> Markup:
        if name not in unit:
            return Markup("")
        return Markup(unit.render(name, data, child=child))

    def require(name: str, data: Any = None) -> Markup:
        if name not in unit:
            raise TemplateMissingFault(name)
        return Markup(unit.render(name, data, child=child))

    return {
        "view": view,
        "exists": exists,
        "include": include,
        "require": require,
    }
