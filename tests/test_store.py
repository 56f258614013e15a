"""
Test template stores.
"""

import pytest

from quire import DirectoryStore, MemoryStore, TemplateEngine, with_partials, with_root
from quire.paths import ext_pattern


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "views" / "partials").mkdir(parents=True)
    (tmp_path / "views" / "home.tpl").write_text("<main>{{ title }}</main>")
    (tmp_path / "views" / "partials" / "head.tpl").write_text("<head/>")
    (tmp_path / "views" / "notes.txt").write_text("notes")
    (tmp_path / "secret.tpl").write_text("secret")
    return tmp_path


class TestDirectoryStore:

    def test_lookup(self, tree):
        store = DirectoryStore(tree)
        assert store.lookup("views", ext_pattern("", ".tpl")) == [
            "views/home.tpl",
            "views/partials/head.tpl",
        ]

    def test_lookup_whole_store(self, tree):
        store = DirectoryStore(tree)
        assert "secret.tpl" in store.lookup("", ext_pattern("", ".tpl"))

    def test_lookup_missing_directory(self, tree):
        assert DirectoryStore(tree).lookup("nope", ".*") == []

    def test_read_file(self, tree):
        assert DirectoryStore(tree).read_file("views/home.tpl") == b"<main>{{ title }}</main>"

    def test_read_missing_file(self, tree):
        with pytest.raises(FileNotFoundError):
            DirectoryStore(tree).read_file("views/missing.tpl")

    def test_read_outside_base(self, tree):
        store = DirectoryStore(tree / "views")
        with pytest.raises(FileNotFoundError):
            store.read_file("../secret.tpl")

    def test_engine_over_directory(self, tree):
        engine = TemplateEngine(DirectoryStore(tree), with_root("views"), with_partials("views/partials"))
        engine.load()

        assert engine.partial_names() == ["@partials/head"]
        assert engine.compile("home", data={"title": "T"}) == "<main>T</main>"


class TestMemoryStore:

    def test_lookup_filters_by_root(self):
        store = MemoryStore({"a/x.tpl": "", "ab/y.tpl": "", "a/z.txt": ""})
        assert store.lookup("a", ext_pattern("", ".tpl")) == ["a/x.tpl"]
        assert store.lookup("", ext_pattern("", ".tpl")) == ["a/x.tpl", "ab/y.tpl"]

    def test_read_counts(self):
        store = MemoryStore({"x.tpl": "x"})
        store.read_file("x.tpl")
        store.read_file("/x.tpl")
        assert store.reads["x.tpl"] == 2

    def test_write_and_remove(self):
        store = MemoryStore()
        store.write("x.tpl", "é")
        assert store.read_file("x.tpl") == "é".encode("utf-8")
        assert len(store) == 1

        store.remove("x.tpl")
        with pytest.raises(FileNotFoundError):
            store.read_file("x.tpl")

    def test_bytes_decoded_with_configured_encoding(self):
        from quire import with_encoding
        store = MemoryStore({"x.tpl": "café".encode("latin-1")})
        engine = TemplateEngine(store, with_encoding("latin-1"))
        assert engine.compile("x") == "café"
