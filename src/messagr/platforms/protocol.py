"""Remote client protocol definition."""

from abc import ABC, abstractmethod
from typing import Any

from messagr.platforms.models import PlatformId


class RemoteClient(ABC):
    """Abstract capability for the remote procedure endpoint.

    The facade never builds a transport itself; an implementation of this
    class is injected into every component. Implementations serialize the
    calls to the endpoint and return the decoded responses unchanged.

    Unless noted otherwise, every method returns a tagged value:
    ``{"Ok": payload}`` on success or ``{"Err": wire_error}`` on failure,
    where ``wire_error`` is a single-key mapping such as
    ``{"PlatformError": "token expired"}``.

    Optional arguments use the zero-or-one-element sequence convention:
    ``[]`` when absent, ``[value]`` when present.
    """

    # -- platform lifecycle ---------------------------------------------------

    @abstractmethod
    async def get_connected_platforms(self) -> list[Any]:
        """Platforms connected for the caller.

        Untagged: returns the list directly. Elements are PlatformId values
        or their variant encoding (``{"Slack": None}``).
        """
        ...

    @abstractmethod
    async def connect_platform(self, config: dict[str, Any]) -> Any:
        """Connect a platform.

        Args:
            config: Wire form of an AuthConfig (see ``AuthConfig.to_wire``).

        Returns:
            Tagged confirmation string.
        """
        ...

    @abstractmethod
    async def disconnect_platform(self, platform: PlatformId) -> Any:
        """Disconnect a platform. Returns a tagged bool."""
        ...

    @abstractmethod
    async def sync_messages(self, platform: PlatformId) -> Any:
        """Pull new messages from a platform. Returns a tagged count."""
        ...

    # -- conversations and messages -------------------------------------------

    @abstractmethod
    async def get_conversations(self, platform: PlatformId) -> Any:
        """List a platform's conversations. Returns a tagged list."""
        ...

    @abstractmethod
    async def get_messages(
        self, conversation_id: str, limit: list[int], offset: list[int]
    ) -> Any:
        """Read one page of a conversation's messages. Returns a tagged list."""
        ...

    # -- queries --------------------------------------------------------------

    @abstractmethod
    async def query_conversations(self, text: str) -> Any:
        """Plain text query. Returns a tagged QueryResult."""
        ...

    @abstractmethod
    async def advanced_search(
        self,
        text: str,
        platform: list[PlatformId],
        start_time: list[int],
        end_time: list[int],
        conversation_id: list[str],
        sender_id: list[str],
        has_attachments: list[bool],
        attachment_type: list[str],
        is_reply: list[bool],
        in_thread: list[bool],
        is_edited: list[bool],
        sort_by: str,
        sort_direction: str,
        limit: list[int],
        offset: list[int],
    ) -> Any:
        """Structured search. Returns a tagged QueryResult."""
        ...

    @abstractmethod
    async def ai_enhanced_query(self, text: str) -> Any:
        """AI query across all platforms. Returns a tagged QueryResult."""
        ...

    @abstractmethod
    async def ai_query_platform(self, text: str, platform: PlatformId) -> Any:
        """AI query scoped to one platform. Returns a tagged QueryResult."""
        ...

    @abstractmethod
    async def analyze_topic(self, topic: str) -> Any:
        """Topic analysis. Returns a tagged string."""
        ...

    @abstractmethod
    async def generate_conversation_insights(self, conversation_id: str) -> Any:
        """AI insights for a conversation. Returns tagged insights."""
        ...

    # -- index administration -------------------------------------------------

    @abstractmethod
    async def get_index_stats(self) -> Any:
        """Returns tagged index statistics."""
        ...

    @abstractmethod
    async def optimize_indices(self) -> Any:
        """Returns a tagged bool."""
        ...

    @abstractmethod
    async def rebuild_indices(self) -> Any:
        """Returns a tagged bool."""
        ...
