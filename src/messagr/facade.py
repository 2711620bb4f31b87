"""
Composition root for the Messagr facade.

Wires every component around one injected RemoteClient and applies the
configured caller-side defaults (search sort/paging, message page size,
list ordering).
"""

import logging
from typing import Any, Optional

from messagr.config import Config, get_config
from messagr.platforms.aggregator import ConversationAggregator, ConversationSnapshot
from messagr.platforms.models import Conversation, Message
from messagr.platforms.protocol import RemoteClient
from messagr.platforms.registry import PlatformRegistry
from messagr.presentation import compose_presentation
from messagr.query.facade import QueryFacade
from messagr.query.messages import MessageFeed
from messagr.query.models import QueryFilter, QueryResult

logger = logging.getLogger(__name__)


class Messagr:
    """Facade handed to UI collaborators.

    Attributes:
        platforms: Connection lifecycle and membership
        conversations: Cross-platform conversation listing
        queries: Text, structured and AI queries
        messages: Paginated message reads
    """

    def __init__(self, remote: RemoteClient, config: Config) -> None:
        self.config = config
        self.platforms = PlatformRegistry(remote)
        self.conversations = ConversationAggregator(remote)
        self.queries = QueryFacade(remote)
        self.messages = MessageFeed(remote)

    async def load(self) -> ConversationSnapshot:
        """Load the connected platform list, then every platform's conversations."""
        await self.platforms.refresh()
        snapshot = await self.conversations.fetch_all()
        logger.info(
            f"Loaded {len(snapshot.conversations)} conversations "
            f"({len(snapshot.diagnostics)} platforms failed)"
        )
        return snapshot

    def search_filter(self, query: str, **fields: Any) -> QueryFilter:
        """Build a search filter with the configured sort and paging defaults."""
        return QueryFilter.with_defaults(query, self.config.search, **fields)

    async def search(self, query: str, **fields: Any) -> QueryResult:
        """Run an advanced search with the configured defaults."""
        return await self.queries.advanced_search(self.search_filter(query, **fields))

    async def get_messages(
        self,
        conversation_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Message]:
        """Read a page of messages, defaulting to the configured page."""
        paging = self.config.messages
        return await self.messages.get_messages(
            conversation_id,
            paging.page_size if limit is None else limit,
            paging.offset if offset is None else offset,
        )

    def present(
        self,
        text_filter: str = "",
        platform_filter: str = "",
        sort_key: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> list[Conversation]:
        """Filter and sort the current conversation snapshot for display."""
        defaults = self.config.presentation
        return compose_presentation(
            self.conversations.conversations,
            text_filter=text_filter,
            platform_filter=platform_filter,
            sort_key=sort_key or defaults.sort_key,
            sort_direction=sort_direction or defaults.sort_direction,
        )


def create_messagr(remote: RemoteClient, config: Optional[Config] = None) -> Messagr:
    """
    Create a facade around a remote client.

    Args:
        remote: The remote endpoint capability.
        config: Configuration; loaded from disk and environment when omitted.

    Returns:
        A ready Messagr facade.
    """
    return Messagr(remote, config if config is not None else get_config())
