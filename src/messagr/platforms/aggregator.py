"""Concurrent fan-out of conversation listings across all platforms."""

import asyncio
import logging
from dataclasses import dataclass, field

from pydantic import TypeAdapter

from messagr.generation import GenerationCounter
from messagr.platforms.models import KNOWN_PLATFORMS, Conversation, PlatformId
from messagr.platforms.protocol import RemoteClient
from messagr.remote.errors import ErrorKind, FacadeError, InvalidInputError
from messagr.remote.results import call_remote, parse_payload

logger = logging.getLogger(__name__)

_CONVERSATION_LIST = TypeAdapter(list[Conversation])


@dataclass
class PlatformDiagnostic:
    """Record of a platform whose listing failed."""

    platform: PlatformId
    error: FacadeError

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass
class ConversationSnapshot:
    """Merged result of one fetch across all platforms."""

    generation: int = 0
    conversations: list[Conversation] = field(default_factory=list)
    diagnostics: list[PlatformDiagnostic] = field(default_factory=list)

    @property
    def failed_platforms(self) -> list[PlatformId]:
        return [d.platform for d in self.diagnostics]

    @property
    def is_partial(self) -> bool:
        return bool(self.diagnostics)


class ConversationAggregator:
    """Lists conversations from every known platform.

    Each ``fetch_all`` call:
    1. Takes a new generation
    2. Issues one ``get_conversations`` call per platform, all at once
    3. Concatenates successful listings in platform order
    4. Records failed platforms as diagnostics instead of raising
    5. Replaces the shared snapshot only if no newer fetch was started
    """

    def __init__(self, remote: RemoteClient) -> None:
        """Initialize the aggregator.

        Args:
            remote: The remote endpoint capability
        """
        self._remote = remote
        self._generations = GenerationCounter()
        self._snapshot = ConversationSnapshot()
        self._in_flight = 0

    @property
    def snapshot(self) -> ConversationSnapshot:
        """The most recently applied snapshot."""
        return self._snapshot

    @property
    def conversations(self) -> list[Conversation]:
        return list(self._snapshot.conversations)

    @property
    def diagnostics(self) -> list[PlatformDiagnostic]:
        return list(self._snapshot.diagnostics)

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    async def fetch_all(self) -> ConversationSnapshot:
        """Fetch conversations from all platforms concurrently.

        Never raises for per-platform failures; they are returned as
        diagnostics next to the data from the other platforms.

        Returns:
            This call's snapshot. It is also applied as the shared snapshot
            unless a newer fetch has been started in the meantime.
        """
        generation = self._generations.next()
        self._in_flight += 1
        try:
            outcomes = await asyncio.gather(
                *[self._fetch_platform(platform) for platform in KNOWN_PLATFORMS]
            )
        finally:
            self._in_flight -= 1

        snapshot = ConversationSnapshot(generation=generation)
        for platform, outcome in zip(KNOWN_PLATFORMS, outcomes):
            if isinstance(outcome, FacadeError):
                snapshot.diagnostics.append(PlatformDiagnostic(platform, outcome))
            else:
                snapshot.conversations.extend(outcome)

        if self._generations.is_current(generation):
            self._snapshot = snapshot
        else:
            logger.debug(
                f"Discarding stale conversation fetch {generation} "
                f"(latest is {self._generations.latest})"
            )

        return snapshot

    def get_conversation(self, conversation_id: str) -> Conversation:
        """Look up a conversation in the current snapshot.

        Raises:
            InvalidInputError: If the conversation is not in the snapshot
        """
        for conversation in self._snapshot.conversations:
            if conversation.id == conversation_id:
                return conversation
        raise InvalidInputError(f"Conversation not found: {conversation_id}")

    async def _fetch_platform(self, platform: PlatformId) -> list[Conversation] | FacadeError:
        try:
            payload = await call_remote(
                "get_conversations", self._remote.get_conversations(platform)
            )
            return parse_payload(_CONVERSATION_LIST, payload, "get_conversations")
        except FacadeError as e:
            logger.warning(f"Error fetching {platform} conversations: {e}")
            return e
