"""
Presentation helpers for aggregated conversations and messages.

Pure functions: no network access and no shared state. Inputs are never
mutated; every call returns a new list.
"""

import locale
from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Literal

from messagr.platforms.models import KNOWN_PLATFORMS, Conversation, Message, PlatformId

SortKey = Literal["lastActivity", "name", "platform", "participants"]
SortDirection = Literal["asc", "desc"]


def _compare(a: int | float, b: int | float) -> int:
    return (a > b) - (a < b)


def _by_name(a: Conversation, b: Conversation) -> int:
    return locale.strcoll(a.name, b.name)


def _by_platform(a: Conversation, b: Conversation) -> int:
    return locale.strcoll(a.platform.value, b.platform.value)


def _by_participants(a: Conversation, b: Conversation) -> int:
    return _compare(len(a.participants), len(b.participants))


def _by_last_activity(a: Conversation, b: Conversation) -> int:
    return _compare(a.last_message_at or 0, b.last_message_at or 0)


_COMPARATORS: dict[str, Callable[[Conversation, Conversation], int]] = {
    "name": _by_name,
    "platform": _by_platform,
    "participants": _by_participants,
    "lastActivity": _by_last_activity,
}


def filter_conversations(
    conversations: Iterable[Conversation],
    text_filter: str = "",
    platform_filter: str = "",
) -> list[Conversation]:
    """
    Keep conversations matching both filters.

    Args:
        conversations: Conversations to filter.
        text_filter: Case-insensitive substring of the name; empty matches all.
        platform_filter: Case-insensitive platform name; empty matches all.

    Returns:
        Matching conversations in input order.
    """
    text = text_filter.lower()
    platform = platform_filter.lower()
    return [
        c
        for c in conversations
        if (not platform or c.platform.value.lower() == platform)
        and (not text or text in c.name.lower())
    ]


def sort_conversations(
    conversations: Iterable[Conversation],
    sort_key: SortKey | str = "lastActivity",
    sort_direction: SortDirection | str = "desc",
) -> list[Conversation]:
    """
    Sort conversations stably.

    ``desc`` flips the sign of the comparison rather than reversing the
    output, so ties keep their input order in both directions. Unknown sort
    keys fall back to ``lastActivity``; a missing ``last_message_at`` counts
    as 0.
    """
    comparator = _COMPARATORS.get(sort_key, _by_last_activity)
    sign = 1 if sort_direction == "asc" else -1
    return sorted(conversations, key=cmp_to_key(lambda a, b: sign * comparator(a, b)))


def compose_presentation(
    conversations: Iterable[Conversation],
    text_filter: str = "",
    platform_filter: str = "",
    sort_key: SortKey | str = "lastActivity",
    sort_direction: SortDirection | str = "desc",
) -> list[Conversation]:
    """
    Filter then sort conversations for display.

    Args:
        conversations: Aggregated conversations.
        text_filter: Case-insensitive substring of the conversation name.
        platform_filter: Case-insensitive platform name.
        sort_key: One of lastActivity, name, platform, participants.
        sort_direction: asc or desc.

    Returns:
        A new list; equal inputs always give value-equal outputs.
    """
    return sort_conversations(
        filter_conversations(conversations, text_filter, platform_filter),
        sort_key,
        sort_direction,
    )


def count_by_platform(conversations: Iterable[Conversation]) -> dict[PlatformId, int]:
    """Count conversations per platform, with every known platform present."""
    counts = {platform: 0 for platform in KNOWN_PLATFORMS}
    for conversation in conversations:
        counts[conversation.platform] += 1
    return counts


def sort_messages(
    messages: Iterable[Message], sort_direction: SortDirection | str = "desc"
) -> list[Message]:
    """Order messages by timestamp, keeping ties in input order."""
    sign = 1 if sort_direction == "asc" else -1
    return sorted(
        messages, key=cmp_to_key(lambda a, b: sign * _compare(a.timestamp, b.timestamp))
    )
