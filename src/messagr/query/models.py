"""Data models for queries and their results."""

from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field

from messagr.config.schema import SearchConfig
from messagr.platforms.models import (
    Message,
    OptionalFloat,
    OptionalInt,
    decode_wire_optional,
)

# Optional QueryFilter fields, in advanced_search argument order
FILTER_OPTIONAL_FIELDS = (
    "platform",
    "start_time",
    "end_time",
    "conversation_id",
    "sender_id",
    "has_attachments",
    "attachment_type",
    "is_reply",
    "in_thread",
    "is_edited",
    "limit",
    "offset",
)


class QueryFilter(BaseModel):
    """Structured search request.

    ``sort_by`` and ``sort_direction`` are required; callers pick their
    defaults (see :meth:`with_defaults`). Every other field is optional and
    None means "no constraint".
    """

    query: str
    platform: Optional[str] = None  # case-insensitive platform name
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    conversation_id: Optional[str] = None
    sender_id: Optional[str] = None
    has_attachments: Optional[bool] = None
    attachment_type: Optional[str] = None
    is_reply: Optional[bool] = None
    in_thread: Optional[bool] = None
    is_edited: Optional[bool] = None
    sort_by: str
    sort_direction: Literal["asc", "desc"]
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def with_defaults(cls, query: str, search: SearchConfig, **fields: Any) -> "QueryFilter":
        """Build a filter, filling sort and paging from configured defaults.

        Args:
            query: Free text to search for
            search: Search defaults
            **fields: Explicit filter fields, which take precedence

        Returns:
            A validated QueryFilter
        """
        values: dict[str, Any] = {
            "sort_by": search.sort_by,
            "sort_direction": search.sort_direction,
            "limit": search.limit,
            "offset": search.offset,
        }
        values.update(fields)
        return cls(query=query, **values)


class QueryResult(BaseModel):
    """Messages matching a query plus the remote's explanation.

    Not deduplicated and not balanced across platforms.
    """

    messages: list[Message] = Field(default_factory=list)
    context: str = ""


class IndexStats(BaseModel):
    message_count: int
    indexed_count: int
    last_optimization: OptionalInt = None
    index_size_bytes: int


# =============================================================================
# Conversation insights
# =============================================================================


class Entity(BaseModel):
    """Person, place, organization or other entity mentioned in messages."""

    name: str
    entity_type: Any  # variant: "Person", ..., or {"Other": "<label>"}
    mentions: int
    sentiment_score: OptionalFloat = None
    related_entities: list[str] = Field(default_factory=list)

    @property
    def entity_label(self) -> str:
        if isinstance(self.entity_type, dict) and len(self.entity_type) == 1:
            ((tag, value),) = self.entity_type.items()
            return str(value) if tag == "Other" and value else str(tag)
        return str(self.entity_type)


class Topic(BaseModel):
    name: str
    relevance_score: float
    message_count: int
    summary: str


class TimelineEvent(BaseModel):
    timestamp: int
    description: str
    related_message_ids: list[str] = Field(default_factory=list)
    importance: int


class SentimentAnalysis(BaseModel):
    overall_sentiment: float  # -1.0 to 1.0
    sentiment_breakdown: dict[str, float] = Field(default_factory=dict)
    key_positive_points: list[str] = Field(default_factory=list)
    key_negative_points: list[str] = Field(default_factory=list)


class ConversationThread(BaseModel):
    topic: str
    message_ids: list[str] = Field(default_factory=list)
    participants: list[str] = Field(default_factory=list)
    resolved: bool


class ConversationFlow(BaseModel):
    main_threads: list[ConversationThread] = Field(default_factory=list)
    key_decisions: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)


class ConversationInsights(BaseModel):
    """AI-generated analysis of a conversation."""

    entities: list[Entity] = Field(default_factory=list)
    topics: list[Topic] = Field(default_factory=list)
    timeline: Optional[list[TimelineEvent]] = None
    sentiment: Annotated[Optional[SentimentAnalysis], BeforeValidator(decode_wire_optional)] = None
    conversation_flow: Annotated[
        Optional[ConversationFlow], BeforeValidator(decode_wire_optional)
    ] = None
