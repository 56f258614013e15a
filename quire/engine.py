"""
Template Engine - composes documents from views, layouts and partials.

Provides:
- Global partial preloading from a partials root
- Per-render explicit partials
- Two-phase layout rendering (view first, layout embeds its output)
- Compiled-unit caching keyed by the render combination
- Hot-reload in dev mode
"""

import asyncio
import io
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, TextIO, Tuple, Union

from .cache import RenderCache, build_cache_key
from .faults import (
    PartialAlreadyLoadedFault,
    PartialLayoutFault,
    PartialViewFault,
    TemplateNotFoundFault,
)
from .guard import PartialGuard
from .locks import ReadWriteLock
from .options import Option, TemplateOptions
from .paths import ext_pattern, to_name, to_path
from .store import FileStore
from .unit import LAYOUT_PREFIX, VIEW_PREFIX, TemplateUnit


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    """One resolved render combination."""

    view_path: str
    view_id: str
    layout_path: str
    layout_id: str
    partials: Tuple[Tuple[str, str], ...]
    key: str

    @property
    def has_layout(self) -> bool:
        return bool(self.layout_path)


class TemplateEngine:
    """
    Template engine.

    Loads global partials from the store, compiles each view/layout/partial
    combination into a unit derived from the shared base, and renders it.
    Safe to share between threads: renders run concurrently, a reload
    waits for running compiles and blocks new ones until it is done.

    Args:
        store: Template store
        *options: Option functions, applied in order
        config: Starting configuration (defaults to TemplateOptions())

    Example:
        engine = TemplateEngine(
            DirectoryStore("./assets"),
            with_root("views"),
            with_partials("views/partials"),
            with_cache(),
        )
        engine.load()
        html = engine.compile("pages/home", "layout", {"title": "Hi"})
    """

    def __init__(
        self,
        store: FileStore,
        *options: Option,
        config: Optional[TemplateOptions] = None,
    ):
        self.store = store
        self.options = (config or TemplateOptions()).apply(*options)
        self.cache = RenderCache()

        self._lock = ReadWriteLock()
        self._base: Optional[TemplateUnit] = None
        self._guard = PartialGuard("", self.options.extension)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """
        (Re)build the base unit from the store.

        Every template under the views root that lies in the partials root
        is compiled into the base unit as "@partials/<name>". The new base
        replaces the old one and the render cache is emptied in a single
        step; if anything fails, the previous state stays in place.

        Raises:
            OSError: If the store fails
            jinja2.TemplateSyntaxError: If a partial is malformed
        """
        opts = self.options
        with self._lock.write_locked():
            base = TemplateUnit.base(opts)
            guard = PartialGuard(opts.partials, opts.extension)

            files = self.store.lookup(opts.root, ext_pattern("", opts.extension))
            if guard.enabled:
                for path in files:
                    if not guard.is_partial(path):
                        continue
                    base.parse(guard.identifier(path), self._decode(self.store.read_file(path)))

            self._base = base
            self._guard = guard
            self.cache.clear()

        logger.debug(f"Loaded {len(base)} global partials from {opts.partials or '<none>'}")

    @property
    def loaded(self) -> bool:
        return self._base is not None

    def partial_names(self) -> list:
        """Identifiers of the globally loaded partials."""
        with self._lock.read_locked():
            return self._base.names() if self._base is not None else []

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        writer: TextIO,
        view: str,
        data: Any = None,
        layout: Optional[str] = None,
        partials: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Render `view` to `writer`.

        Without a layout the view streams straight to the writer. With a
        layout the view is rendered first; the layout then runs with the
        same data and embeds the view output through `view()`.

        Args:
            writer: Object with a `write(str)` method
            view: View template name
            data: Template data (mapping, TemplateContext or object)
            layout: Layout template name ("" or None for none)
            partials: Extra templates registered under their identifiers
                (a sequence of names; a bare string is rejected)

        Raises:
            TemplateNotFoundFault: If a view, layout or partial is missing
            CompositionFault: If a global partial is used as view, as
                layout, or again as an explicit partial
            TypeError: If `partials` is a single string
            jinja2.TemplateError: If a template fails to parse or execute
        """
        if self.options.dev:
            logger.debug("Dev mode: reloading templates")
            self.load()
        elif not self.loaded:
            self.load()

        request = self.resolve(view, layout, partials)
        unit = self._resolve_unit(request)

        view_name = VIEW_PREFIX + request.view_id
        if not request.has_layout:
            unit.stream(writer, view_name, data)
            return

        child = unit.render(view_name, data)
        unit.stream(writer, LAYOUT_PREFIX + request.layout_id, data, child=child)

    def compile(
        self,
        view: str,
        layout: Optional[str] = None,
        data: Any = None,
        partials: Optional[Sequence[str]] = None,
    ) -> str:
        """Render into memory and return the document."""
        buffer = io.StringIO()
        self.render(buffer, view, data, layout, partials)
        return buffer.getvalue()

    async def compile_async(
        self,
        view: str,
        layout: Optional[str] = None,
        data: Any = None,
        partials: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Render in a worker thread.

        Use from async code so store reads and template execution do not
        block the event loop.
        """
        return await asyncio.to_thread(self.compile, view, layout, data, partials)

    def resolve(
        self,
        view: str,
        layout: Optional[str] = None,
        partials: Optional[Sequence[str]] = None,
    ) -> RenderRequest:
        """
        Resolve names to store paths, identifiers and the cache key.

        Raises:
            TypeError: If `partials` is a single string instead of a sequence
            TemplateNotFoundFault: If the view is empty or a name leaves the root
        """
        if isinstance(partials, str):
            raise TypeError(
                f"partials must be a sequence of names, not a string; "
                f"use [{partials!r}] for a single partial"
            )

        view_path, view_id = self._locate(view, "view")
        if not view_id:
            raise TemplateNotFoundFault(view or "", "view")

        layout_path, layout_id = self._locate(layout or "", "layout")

        resolved = []
        for name in partials or ():
            if not name:
                continue
            resolved.append(self._locate(name, "partial"))

        key = build_cache_key(view_id, layout_id, [pid for _, pid in resolved])
        return RenderRequest(
            view_path=view_path,
            view_id=view_id,
            layout_path=layout_path,
            layout_id=layout_id,
            partials=tuple(resolved),
            key=key,
        )

    def _locate(self, name: str, role: str) -> Tuple[str, str]:
        root, ext = self.options.root, self.options.extension
        try:
            path = to_path(name, root, ext)
        except ValueError:
            raise TemplateNotFoundFault(name, role) from None
        return path, to_name(path, root, ext)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_unit(self, request: RenderRequest) -> TemplateUnit:
        with self._lock.read_locked():
            self._check_composition(request, self._guard)

            unit = self.cache.get(request.key)
            if unit is not None:
                logger.debug(f"Render cache hit: {request.key}")
                return unit

            unit = self._compile_unit(self._base, request)
            if self.options.cache and not self.options.dev:
                unit = self.cache.put(request.key, unit)
                logger.debug(f"Render cache store: {request.key}")
            return unit

    def _check_composition(self, request: RenderRequest, guard: PartialGuard) -> None:
        if guard.is_partial(request.view_path):
            raise PartialViewFault(request.view_path)
        if request.has_layout and guard.is_partial(request.layout_path):
            raise PartialLayoutFault(request.layout_path)
        for path, _ in request.partials:
            if guard.is_partial(path):
                raise PartialAlreadyLoadedFault(path)

    def _compile_unit(self, base: TemplateUnit, request: RenderRequest) -> TemplateUnit:
        unit = base.derive()
        unit.parse(VIEW_PREFIX + request.view_id, self._read(request.view_path, "view"))
        if request.has_layout:
            unit.parse(LAYOUT_PREFIX + request.layout_id, self._read(request.layout_path, "layout"))
        for path, pid in request.partials:
            unit.parse(pid, self._read(path, "partial"))
        return unit

    def _read(self, path: str, role: str) -> str:
        try:
            raw = self.store.read_file(path)
        except FileNotFoundError:
            raise TemplateNotFoundFault(path, role) from None
        return self._decode(raw)

    def _decode(self, raw: Union[str, bytes]) -> str:
        if isinstance(raw, bytes):
            return raw.decode(self.options.encoding)
        return raw

    def __repr__(self) -> str:
        return (
            f"TemplateEngine(store={self.store!r}, root={self.options.root!r}, "
            f"partials={self.options.partials!r}, dev={self.options.dev}, "
            f"cache={self.options.cache})"
        )
