"""
Test path normalization, name/path conversion and the partial guard.
"""

import re

import pytest

from quire import PartialGuard, normalize_path, to_name, to_path
from quire.paths import ext_pattern, strip_root


# ============================================================================
# Normalization
# ============================================================================

class TestNormalizePath:

    @pytest.mark.parametrize("parts,expected", [
        (("views", "pages/home.tpl"), "views/pages/home.tpl"),
        (("/views/", "pages"), "views/pages"),
        (("views\\pages\\home.tpl",), "views/pages/home.tpl"),
        (("views/./pages/../home.tpl",), "views/home.tpl"),
        ((".",), ""),
        (("",), ""),
        (("", "home.tpl"), "home.tpl"),
    ])
    def test_normalize(self, parts, expected):
        assert normalize_path(*parts) == expected

    def test_strip_root(self):
        assert strip_root("views/home.tpl", "views") == "home.tpl"
        assert strip_root("viewsx/home.tpl", "views") == "viewsx/home.tpl"
        assert strip_root("views", "views") == ""
        assert strip_root("home.tpl", "") == "home.tpl"


# ============================================================================
# Conversion
# ============================================================================

class TestConversion:

    @pytest.mark.parametrize("name", [
        "pages/home",
        "pages/home.tpl",
        "views/pages/home",
        "views/pages/home.tpl",
        "/views/pages/home.tpl",
        "pages\\home",
    ])
    def test_to_path_forms_agree(self, name):
        assert to_path(name, "views", ".tpl") == "views/pages/home.tpl"

    @pytest.mark.parametrize("name", ["layout", "pages/home", "a/b/c.tpl"])
    def test_to_path_is_idempotent(self, name):
        once = to_path(name, "views", ".tpl")
        assert to_path(once, "views", ".tpl") == once

    def test_to_name(self):
        assert to_name("views/pages/home.tpl", "views", ".tpl") == "pages/home"
        assert to_name("pages/home", "views", ".tpl") == "pages/home"
        assert to_name("home.tpl", "", ".tpl") == "home"

    def test_empty_name(self):
        assert to_path("", "views", ".tpl") == ""
        assert to_name("", "views", ".tpl") == ""

    @pytest.mark.parametrize("name", ["../x", "..", "a/../../x", "views/../../x.tpl"])
    def test_names_leaving_the_store_are_rejected(self, name):
        with pytest.raises(ValueError, match="leaves the store root"):
            to_name(name, "views", ".tpl")
        with pytest.raises(ValueError):
            to_path(name, "views", ".tpl")

    def test_dot_segments_inside_the_store_are_resolved(self):
        assert to_path("pages/../home", "views", ".tpl") == "views/home.tpl"
        assert to_name(to_path("pages/../home", "views", ".tpl"), "views", ".tpl") == to_name("pages/../home", "views", ".tpl")

    def test_store_root(self):
        assert to_path("home", "", ".tpl") == "home.tpl"


class TestExtPattern:

    def test_without_directory(self):
        rx = re.compile(ext_pattern("", ".tpl"))
        assert rx.search("views/home.tpl")
        assert not rx.search("views/home.tpl.bak")

    def test_with_directory(self):
        rx = re.compile(ext_pattern("views/partials", ".tpl"))
        assert rx.match("views/partials/nav/main.tpl")
        assert not rx.match("views/partialsx/main.tpl")
        assert not rx.match("other/views/partials/main.tpl")

    def test_extension_dot_is_literal(self):
        rx = re.compile(ext_pattern("", ".tpl"))
        assert not rx.search("views/homextpl")


# ============================================================================
# Guard
# ============================================================================

class TestPartialGuard:

    def test_matches_partials_root(self):
        guard = PartialGuard("views/partials", ".tpl")
        assert guard.enabled
        assert guard.is_partial("views/partials/header.tpl")
        assert guard.is_partial("views/partials/nav/main.tpl")
        assert not guard.is_partial("views/pages/home.tpl")
        assert not guard.is_partial("views/partials/notes.md")
        assert not guard.is_partial("")

    def test_disabled_without_root(self):
        guard = PartialGuard("", ".tpl")
        assert not guard.enabled
        assert not guard.is_partial("views/partials/header.tpl")

    def test_identifier_is_namespaced(self):
        guard = PartialGuard("views/partials", ".tpl")
        assert guard.identifier("views/partials/nav/main.tpl") == "@partials/nav/main"
