"""Unit tests for the conversation aggregator."""

import asyncio

import pytest
from fakes import conversation_payload

from messagr.platforms.aggregator import ConversationAggregator, ConversationSnapshot
from messagr.platforms.models import KNOWN_PLATFORMS, PlatformId
from messagr.remote.errors import (
    ErrorKind,
    InternalFailureError,
    InvalidInputError,
    PlatformFailureError,
    UnknownFacadeError,
)


@pytest.fixture
def aggregator(remote):
    """Create an aggregator around the fake remote."""
    return ConversationAggregator(remote)


def listing(platform, count, prefix=""):
    return {
        "Ok": [
            conversation_payload(f"{prefix}{platform.value.lower()}-{i}", platform=platform.value)
            for i in range(count)
        ]
    }


def per_platform(responses):
    """Build a get_conversations responder from a platform -> response map."""

    def respond(platform):
        return responses[platform]

    return respond


class TestFetchAll:
    """Tests for fetching conversations across platforms."""

    @pytest.mark.asyncio
    async def test_initial_snapshot_is_empty(self, aggregator):
        assert aggregator.snapshot == ConversationSnapshot()
        assert aggregator.conversations == []
        assert not aggregator.is_loading

    @pytest.mark.asyncio
    async def test_one_call_per_platform(self, aggregator, remote):
        await aggregator.fetch_all()

        platforms = [args[0] for args, _ in remote.calls_to("get_conversations")]
        assert sorted(platforms) == sorted(KNOWN_PLATFORMS)
        assert len(platforms) == len(KNOWN_PLATFORMS)

    @pytest.mark.asyncio
    async def test_partial_failure(self, aggregator, remote):
        """Failed platforms become diagnostics; the rest are merged."""
        remote.responses["get_conversations"] = per_platform(
            {
                PlatformId.TELEGRAM: listing(PlatformId.TELEGRAM, 2),
                PlatformId.SLACK: {"Err": {"PlatformError": "token revoked"}},
                PlatformId.DISCORD: listing(PlatformId.DISCORD, 3),
                PlatformId.TWITTER: {"Err": {"NotAuthenticated": None}},
                PlatformId.FACEBOOK: listing(PlatformId.FACEBOOK, 1),
                PlatformId.WHATSAPP: listing(PlatformId.WHATSAPP, 4),
            }
        )

        snapshot = await aggregator.fetch_all()

        assert len(snapshot.conversations) == 10
        assert snapshot.is_partial
        assert snapshot.failed_platforms == [PlatformId.SLACK, PlatformId.TWITTER]
        assert [d.kind for d in snapshot.diagnostics] == [
            ErrorKind.PLATFORM_FAILURE,
            ErrorKind.UNAUTHENTICATED,
        ]
        assert isinstance(snapshot.diagnostics[0].error, PlatformFailureError)
        assert aggregator.snapshot is snapshot

    @pytest.mark.asyncio
    async def test_conversations_in_platform_order(self, aggregator, remote):
        remote.responses["get_conversations"] = per_platform(
            {platform: listing(platform, 2) for platform in KNOWN_PLATFORMS}
        )

        snapshot = await aggregator.fetch_all()

        platforms = [c.platform for c in snapshot.conversations]
        assert platforms == [p for p in KNOWN_PLATFORMS for _ in range(2)]
        assert [c.id for c in snapshot.conversations[:2]] == ["telegram-0", "telegram-1"]

    @pytest.mark.asyncio
    async def test_transport_failure_isolated(self, aggregator, remote):
        def respond(platform):
            if platform is PlatformId.DISCORD:
                return ConnectionError("socket closed")
            return listing(platform, 1)

        remote.responses["get_conversations"] = respond

        snapshot = await aggregator.fetch_all()

        assert len(snapshot.conversations) == 5
        assert snapshot.failed_platforms == [PlatformId.DISCORD]
        assert isinstance(snapshot.diagnostics[0].error, UnknownFacadeError)
        assert snapshot.diagnostics[0].error.message == "Unknown error"

    @pytest.mark.asyncio
    async def test_malformed_listing_isolated(self, aggregator, remote):
        def respond(platform):
            if platform is PlatformId.FACEBOOK:
                return {"Ok": [{"id": "broken"}]}
            return {"Ok": []}

        remote.responses["get_conversations"] = respond

        snapshot = await aggregator.fetch_all()

        assert snapshot.failed_platforms == [PlatformId.FACEBOOK]
        assert isinstance(snapshot.diagnostics[0].error, InternalFailureError)

    @pytest.mark.asyncio
    async def test_calls_are_concurrent(self, aggregator, remote):
        """Every platform call is issued before any of them completes."""
        release = asyncio.Event()
        started = 0

        async def respond(platform):
            nonlocal started
            started += 1
            await release.wait()
            return {"Ok": []}

        remote.responses["get_conversations"] = respond
        task = asyncio.create_task(aggregator.fetch_all())
        while started < len(KNOWN_PLATFORMS):
            await asyncio.sleep(0)

        assert aggregator.is_loading
        release.set()
        await task

        assert not aggregator.is_loading

    @pytest.mark.asyncio
    async def test_stale_fetch_not_applied(self, aggregator, remote):
        """A slower, older fetch never replaces a newer snapshot."""
        release_old = asyncio.Event()
        calls = 0

        async def respond(platform):
            nonlocal calls
            calls += 1
            if calls <= len(KNOWN_PLATFORMS):
                await release_old.wait()
                return listing(platform, 1, prefix="old-")
            return listing(platform, 1, prefix="new-")

        remote.responses["get_conversations"] = respond
        old_task = asyncio.create_task(aggregator.fetch_all())
        while calls < len(KNOWN_PLATFORMS):
            await asyncio.sleep(0)

        newer = await aggregator.fetch_all()
        release_old.set()
        older = await old_task

        assert older.generation == 1
        assert newer.generation == 2
        assert aggregator.snapshot is newer
        assert all(c.id.startswith("new-") for c in aggregator.conversations)


class TestGetConversation:
    """Tests for looking up a single conversation."""

    @pytest.mark.asyncio
    async def test_found(self, aggregator, remote):
        remote.responses["get_conversations"] = per_platform(
            {platform: listing(platform, 1) for platform in KNOWN_PLATFORMS}
        )
        await aggregator.fetch_all()

        conversation = aggregator.get_conversation("slack-0")

        assert conversation.platform == PlatformId.SLACK

    def test_missing(self, aggregator):
        with pytest.raises(InvalidInputError, match="Conversation not found: nope"):
            aggregator.get_conversation("nope")
