"""
Template Context - key/value data passed to a render call.
"""

from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, field


@dataclass
class TemplateContext:
    """
    Template rendering context.

    A thin key/value container for render data. Templates see its keys as
    top-level variables.

    Example:
        ctx = TemplateContext().add("title", "Home").add("user", user)
        engine.compile("pages/home", "layout", ctx)
    """

    data: Dict[str, Any] = field(default_factory=dict)

    def add(self, key: str, value: Any) -> "TemplateContext":
        """Set `key` to `value`. Empty keys are ignored."""
        if key:
            self.data[key] = value
        return self

    def to_dict(self) -> Dict[str, Any]:
        return self.data

    @classmethod
    def of(cls, value: Any) -> "TemplateContext":
        """
        Convert a mapping or context into a context.

        Anything else yields an empty context.
        """
        if isinstance(value, TemplateContext):
            return value
        if isinstance(value, Mapping):
            return cls(data=dict(value))
        return cls()

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


def to_mapping(data: Optional[Any]) -> Dict[str, Any]:
    """
    Flatten render data into template variables.

    - None -> no variables
    - TemplateContext -> its keys
    - Mapping -> a copy of it
    - anything else -> exposed as `data`
    """
    if data is None:
        return {}
    if isinstance(data, TemplateContext):
        return dict(data.data)
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}
