"""Query facade over the remote search and AI endpoints."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from messagr.generation import GenerationCounter
from messagr.platforms.models import PlatformId
from messagr.platforms.protocol import RemoteClient
from messagr.query.models import (
    FILTER_OPTIONAL_FIELDS,
    ConversationInsights,
    IndexStats,
    QueryFilter,
    QueryResult,
)
from messagr.remote.codec import encode_optional_fields
from messagr.remote.errors import FacadeError, InvalidInputError
from messagr.remote.results import call_remote, parse_payload

logger = logging.getLogger(__name__)

_QUERY_RESULT = TypeAdapter(QueryResult)
_INDEX_STATS = TypeAdapter(IndexStats)
_INSIGHTS = TypeAdapter(ConversationInsights)
_BOOL = TypeAdapter(bool)
_TEXT = TypeAdapter(str)


@dataclass
class QueryState:
    """Outcome of the latest query whose result was applied."""

    generation: int = 0
    operation: Optional[str] = None
    result: Optional[QueryResult] = None
    error: Optional[FacadeError] = None


class QueryFacade:
    """Runs text, structured and AI queries against the remote endpoint.

    Every operation resolves with its payload or raises exactly one
    FacadeError. Query operations (``simple_query``, ``advanced_search``,
    ``ai_query``) are generation-stamped: each caller always receives its own
    answer, but :attr:`state` only reflects the most recently started query,
    so a slow response to an older keystroke never replaces a newer one.
    """

    def __init__(self, remote: RemoteClient) -> None:
        """Initialize the query facade.

        Args:
            remote: The remote endpoint capability
        """
        self._remote = remote
        self._generations = GenerationCounter()
        self._state = QueryState()
        self._in_flight = 0

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def is_querying(self) -> bool:
        return self._in_flight > 0

    # -- queries --------------------------------------------------------------

    async def simple_query(self, text: str) -> QueryResult:
        """Run a natural-language query across all platforms."""
        return await self._run_query(
            "query_conversations", lambda: self._remote.query_conversations(text)
        )

    async def advanced_search(self, query_filter: QueryFilter | dict[str, Any]) -> QueryResult:
        """Run a structured search.

        Every optional filter field is sent as a zero-or-one-element
        sequence. ``platform`` is mapped case-insensitively to a PlatformId
        first; an unknown name raises InvalidInputError.

        Args:
            query_filter: The filter, with sort fields already chosen by the caller

        Returns:
            Matching messages and context
        """

        def make_call() -> Awaitable[Any]:
            search = _parse_filter(query_filter)
            values = search.model_dump(include=set(FILTER_OPTIONAL_FIELDS))
            if values["platform"] is not None:
                values["platform"] = PlatformId.parse(values["platform"])
            return self._remote.advanced_search(
                text=search.query,
                sort_by=search.sort_by,
                sort_direction=search.sort_direction,
                **encode_optional_fields(values, FILTER_OPTIONAL_FIELDS),
            )

        return await self._run_query("advanced_search", make_call)

    async def ai_query(self, text: str, platform: PlatformId | str | None = None) -> QueryResult:
        """Run an AI-assisted query.

        Args:
            text: The question
            platform: Restrict the query to one platform; None queries all

        Returns:
            Matching messages and the AI's explanation
        """
        if platform is None:
            return await self._run_query(
                "ai_enhanced_query", lambda: self._remote.ai_enhanced_query(text)
            )

        return await self._run_query(
            "ai_query_platform",
            lambda: self._remote.ai_query_platform(text, PlatformId.parse(platform)),
        )

    # -- passthroughs ---------------------------------------------------------

    async def get_index_stats(self) -> IndexStats:
        payload = await self._call("get_index_stats", self._remote.get_index_stats)
        return parse_payload(_INDEX_STATS, payload, "get_index_stats")

    async def optimize_indices(self) -> bool:
        payload = await self._call("optimize_indices", self._remote.optimize_indices)
        return parse_payload(_BOOL, payload, "optimize_indices")

    async def rebuild_indices(self) -> bool:
        payload = await self._call("rebuild_indices", self._remote.rebuild_indices)
        return parse_payload(_BOOL, payload, "rebuild_indices")

    async def analyze_topic(self, topic: str) -> str:
        """Summarize what the collected messages say about a topic."""
        payload = await self._call("analyze_topic", lambda: self._remote.analyze_topic(topic))
        return parse_payload(_TEXT, payload, "analyze_topic")

    async def generate_conversation_insights(self, conversation_id: str) -> ConversationInsights:
        """Generate AI insights (entities, topics, sentiment, ...) for a conversation."""
        payload = await self._call(
            "generate_conversation_insights",
            lambda: self._remote.generate_conversation_insights(conversation_id),
        )
        return parse_payload(_INSIGHTS, payload, "generate_conversation_insights")

    # -- internals ------------------------------------------------------------

    async def _call(self, operation: str, make_call: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await call_remote(operation, make_call())
        except FacadeError as e:
            logger.error(f"Error in {operation}: {e}")
            raise

    async def _run_query(
        self, operation: str, make_call: Callable[[], Awaitable[Any]]
    ) -> QueryResult:
        generation = self._generations.next()
        self._in_flight += 1
        try:
            payload = await call_remote(operation, make_call())
            result = parse_payload(_QUERY_RESULT, payload, operation)
        except FacadeError as e:
            logger.error(f"Error performing {operation}: {e}")
            self._apply(QueryState(generation, operation, error=e))
            raise
        finally:
            self._in_flight -= 1

        self._apply(QueryState(generation, operation, result=result))
        return result

    def _apply(self, state: QueryState) -> None:
        if self._generations.is_current(state.generation):
            self._state = state
        else:
            logger.debug(f"Discarding stale {state.operation} result {state.generation}")


def _parse_filter(query_filter: QueryFilter | dict[str, Any]) -> QueryFilter:
    if isinstance(query_filter, QueryFilter):
        return query_filter
    try:
        return QueryFilter.model_validate(query_filter)
    except ValidationError as e:
        raise InvalidInputError(f"invalid query filter: {e}") from e
