"""
Messagr query layer.

Provides:
- Plain text, structured and AI-assisted queries
- Index administration passthroughs
- Paginated message reads
"""

from messagr.query.facade import QueryFacade, QueryState
from messagr.query.messages import MessageFeed
from messagr.query.models import (
    ConversationFlow,
    ConversationInsights,
    ConversationThread,
    Entity,
    IndexStats,
    QueryFilter,
    QueryResult,
    SentimentAnalysis,
    TimelineEvent,
    Topic,
)

__all__ = [
    "QueryFacade",
    "QueryState",
    "MessageFeed",
    "QueryFilter",
    "QueryResult",
    "IndexStats",
    "ConversationInsights",
    "Entity",
    "Topic",
    "TimelineEvent",
    "SentimentAnalysis",
    "ConversationFlow",
    "ConversationThread",
]
