"""
Test fault types.
"""

import pytest

from quire import (
    CompositionFault,
    Fault,
    PartialAlreadyLoadedFault,
    PartialLayoutFault,
    PartialViewFault,
    TemplateFault,
    TemplateMissingFault,
    TemplateNotFoundFault,
    ViewNotBoundFault,
)
from quire.faults import ConfigInvalidFault, FaultDomain, Severity


class TestFaults:

    @pytest.mark.parametrize("role,code,message", [
        ("view", "VIEW_NOT_FOUND", "a.tpl template not found"),
        ("layout", "LAYOUT_NOT_FOUND", "a.tpl layout template not found"),
        ("partial", "PARTIAL_NOT_FOUND", "a.tpl partial template not found"),
    ])
    def test_not_found(self, role, code, message):
        fault = TemplateNotFoundFault("a.tpl", role)
        assert fault.code == code
        assert fault.message == message
        assert str(fault) == f"[{code}] {message}"

    def test_composition_faults(self):
        for cls in (PartialViewFault, PartialLayoutFault, PartialAlreadyLoadedFault):
            fault = cls("p.tpl")
            assert isinstance(fault, CompositionFault)
            assert isinstance(fault, TemplateFault)
            assert fault.path == "p.tpl"
            assert fault.message.startswith("p.tpl partial ")

    def test_builtin_faults(self):
        assert ViewNotBoundFault().message == "layout template called without view"
        assert TemplateMissingFault("x").message == "template x does not exist"

    def test_domains_and_severity(self):
        assert TemplateMissingFault("x").domain == FaultDomain.TEMPLATE
        assert TemplateMissingFault("x").severity == Severity.ERROR
        assert ConfigInvalidFault("k", "bad").severity == Severity.FATAL

    def test_to_dict(self):
        data = PartialViewFault("p.tpl").to_dict()
        assert data["code"] == "PARTIAL_AS_VIEW"
        assert data["domain"] == "template"
        assert data["metadata"] == {"path": "p.tpl"}

    def test_faults_are_exceptions(self):
        with pytest.raises(Fault):
            raise TemplateMissingFault("x")
