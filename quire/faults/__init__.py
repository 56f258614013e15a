"""
Quire faults - structured errors raised by the template engine.

Every error the engine raises on its own account is a typed fault with a
stable code, a domain and a severity. Errors coming from the template
language (Jinja2 syntax and runtime errors) and non-"not found" store errors
propagate unchanged.
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    TemplateFault,
    TemplateNotFoundFault,
    CompositionFault,
    PartialViewFault,
    PartialLayoutFault,
    PartialAlreadyLoadedFault,
    ViewNotBoundFault,
    TemplateMissingFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Config
    "ConfigFault",
    "ConfigInvalidFault",

    # Template
    "TemplateFault",
    "TemplateNotFoundFault",
    "CompositionFault",
    "PartialViewFault",
    "PartialLayoutFault",
    "PartialAlreadyLoadedFault",
    "ViewNotBoundFault",
    "TemplateMissingFault",
]
