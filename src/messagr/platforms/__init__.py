"""Connected platforms and cross-platform conversation listing.

Key Components:
    - RemoteClient: Abstract capability for the remote endpoint
    - PlatformRegistry: Connect/disconnect/sync lifecycle and membership
    - ConversationAggregator: Concurrent per-platform conversation fan-out
"""

from messagr.platforms.aggregator import (
    ConversationAggregator,
    ConversationSnapshot,
    PlatformDiagnostic,
)
from messagr.platforms.models import (
    KNOWN_PLATFORMS,
    Attachment,
    AuthConfig,
    Conversation,
    Message,
    MessageContent,
    Participant,
    PlatformId,
    PlatformState,
)
from messagr.platforms.protocol import RemoteClient
from messagr.platforms.registry import PlatformRegistry

__all__ = [
    "RemoteClient",
    "PlatformRegistry",
    "ConversationAggregator",
    "ConversationSnapshot",
    "PlatformDiagnostic",
    "KNOWN_PLATFORMS",
    "PlatformId",
    "PlatformState",
    "AuthConfig",
    "Participant",
    "Attachment",
    "MessageContent",
    "Message",
    "Conversation",
]
