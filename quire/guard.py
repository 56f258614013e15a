"""
Partial guard - recognizes paths under the configured partials root.
"""

import re
from typing import Optional, Pattern

from .paths import ext_pattern, to_name


# Namespace for globally loaded partials inside a unit
PARTIALS_NAMESPACE = "@partials/"


class PartialGuard:
    """
    Matches store paths that start with the partials root and end with the
    template extension.

    With no partials root configured the guard is disabled and
    `is_partial` is always False.

    Args:
        partials: Normalized partials root ("" disables the guard)
        extension: Template file extension
    """

    def __init__(self, partials: str, extension: str):
        self.partials = partials
        self.extension = extension
        self._pattern: Optional[Pattern[str]] = (
            re.compile(ext_pattern(partials, extension)) if partials else None
        )

    @property
    def enabled(self) -> bool:
        return self._pattern is not None

    def is_partial(self, path: str) -> bool:
        if self._pattern is None or not path:
            return False
        return self._pattern.match(path) is not None

    def identifier(self, path: str) -> str:
        """Namespaced identifier for a global partial at `path`."""
        return PARTIALS_NAMESPACE + to_name(path, self.partials, self.extension)

    def __repr__(self) -> str:
        return f"PartialGuard(partials={self.partials!r}, extension={self.extension!r})"
