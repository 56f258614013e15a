"""
Shared test fixtures for the quire test suite.
"""

import pytest

from quire import (
    MemoryStore,
    TemplateEngine,
    with_partials,
    with_root,
)


# ============================================================================
# Stores
# ============================================================================


def site_files() -> dict:
    """A small site: root=views, partials=views/partials, extension=.tpl."""
    return {
        "views/partials/header.tpl": "<header>{{ Title }}</header>",
        "views/partials/nav/main.tpl": "<nav>{{ exists('@partials/header') }}</nav>",
        "views/pages/home.tpl": "<main>{{ Title }}</main>",
        "views/pages/about.tpl": '{% include "@partials/header" %}<p>about</p>',
        "views/pages/cards.tpl": "{{ include('components/card', {'title': 'A'}) }}",
        "views/pages/probe.tpl": "{{ exists('components/card') }}",
        "views/layout.tpl": "<html>{{ view() }}</html>",
        "views/components/card.tpl": "<div>{{ title }}</div>",
        "views/components/badge.tpl": "<span>{{ title }}</span>",
        "README.md": "not a template",
    }


@pytest.fixture
def store():
    """In-memory store with the site templates."""
    return MemoryStore(site_files())


@pytest.fixture
def make_engine(store):
    """Factory for engines over the shared store, loaded and ready."""

    def factory(*options, load: bool = True) -> TemplateEngine:
        engine = TemplateEngine(
            store,
            with_root("views"),
            with_partials("views/partials"),
            *options,
        )
        if load:
            engine.load()
        return engine

    return factory


@pytest.fixture
def engine(make_engine):
    """Loaded engine without caching."""
    return make_engine()
