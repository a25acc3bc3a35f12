"""Current-graph holder for asynchronously provided sources."""

import logging
from typing import Awaitable, Callable, Optional, Sequence

from . import pipeline
from .config import DisplayOptions
from .model import TypeGraph
from .type_graph import TypeGraphView, get_type_graph

logger = logging.getLogger(__name__)

Sources = Sequence[tuple[str, str]]
SourcesProvider = Callable[[], Awaitable[Sources]]


class GraphSession:
    """
    Holds at most one current graph, always from the latest request.

    A load that resolves after a newer load has started is discarded on
    arrival. The current graph is kept until a newer build succeeds, so a
    failed or superseded fetch never leaves the session empty.
    """

    def __init__(self, options: Optional[DisplayOptions] = None):
        self.options = options or DisplayOptions()
        self.sources: Optional[Sources] = None
        self.graph: Optional[TypeGraph] = None
        self._request: Optional[object] = None

    @property
    def loading(self) -> bool:
        return self._request is not None

    async def load(self, provider: SourcesProvider) -> Optional[TypeGraph]:
        """
        Fetch sources and rebuild the graph, unless superseded meanwhile.

        Args:
            provider: Async callable returning (filepath, content) pairs

        Returns:
            The new current graph, or None if a newer load started first
        """
        request = object()
        self._request = request
        try:
            sources = await provider()
        except Exception:
            if request is not self._request:
                logger.debug("Ignoring failure of superseded source fetch", exc_info=True)
                return None
            self._request = None
            raise

        if request is not self._request:
            logger.debug("Discarding sources from superseded fetch")
            return None

        self._request = None
        return self._rebuild(sources, self.options)

    def update(self, sources: Sources, options: Optional[DisplayOptions] = None) -> Optional[TypeGraph]:
        """
        Build a graph from sources and make it current.

        This counts as a newer request, so a load still pending is discarded
        when it arrives.
        """
        self._request = None
        return self._rebuild(sources, options or self.options)

    def set_options(self, options: DisplayOptions) -> Optional[TypeGraph]:
        """
        Rebuild the current sources under new options.

        A pending load is kept and builds with these options when it arrives.
        """
        self.options = options
        if self.sources is None:
            return None
        return self._rebuild(self.sources, options)

    def _rebuild(self, sources: Sources, options: DisplayOptions) -> Optional[TypeGraph]:
        graph = pipeline.get_schema(sources, options)
        self.sources, self.options, self.graph = sources, options, graph
        return graph

    def view(self) -> Optional[TypeGraphView]:
        if self.graph is None:
            return None
        return get_type_graph(self.graph, self.options.root_type, self.options.hide_root)
