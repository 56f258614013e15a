"""
Quire faults - Domain-specific fault types.

Provides concrete fault classes for:
- CONFIG faults (invalid option values)
- TEMPLATE faults (missing files, illegal compositions, built-in failures)
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# TEMPLATE Faults
# ============================================================================

class TemplateFault(Fault):
    """Base class for template faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.TEMPLATE,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


_NOT_FOUND_MESSAGES = {
    "view": "{path} template not found",
    "layout": "{path} layout template not found",
    "partial": "{path} partial template not found",
}


class TemplateNotFoundFault(TemplateFault):
    """Template file for a view, layout or partial is missing from the store."""

    def __init__(self, path: str, role: str = "view"):
        template = _NOT_FOUND_MESSAGES.get(role, _NOT_FOUND_MESSAGES["view"])
        super().__init__(
            code=f"{role.upper()}_NOT_FOUND",
            message=template.format(path=path),
            metadata={"path": path, "role": role},
        )
        self.path = path
        self.role = role


class CompositionFault(TemplateFault):
    """Base class for illegal view/layout/partial combinations."""

    def __init__(self, code: str, message: str, path: str):
        super().__init__(code=code, message=message, metadata={"path": path})
        self.path = path


class PartialViewFault(CompositionFault):
    """A global partial was requested as the view."""

    def __init__(self, path: str):
        super().__init__(
            code="PARTIAL_AS_VIEW",
            message=f"{path} partial cannot render directly",
            path=path,
        )


class PartialLayoutFault(CompositionFault):
    """A global partial was requested as the layout."""

    def __init__(self, path: str):
        super().__init__(
            code="PARTIAL_AS_LAYOUT",
            message=f"{path} partial cannot be used as layout",
            path=path,
        )


class PartialAlreadyLoadedFault(CompositionFault):
    """An explicit partial is already registered from the partials root."""

    def __init__(self, path: str):
        super().__init__(
            code="PARTIAL_ALREADY_LOADED",
            message=f"{path} partial already loaded globally",
            path=path,
        )


class ViewNotBoundFault(TemplateFault):
    """The `view` built-in was called outside a layout pass."""

    def __init__(self):
        super().__init__(
            code="VIEW_NOT_BOUND",
            message="layout template called without view",
        )


class TemplateMissingFault(TemplateFault):
    """`require` asked for a sub-template the unit does not define."""

    def __init__(self, name: str):
        super().__init__(
            code="TEMPLATE_MISSING",
            message=f"template {name} does not exist",
            metadata={"name": name},
        )
        self.name = name
