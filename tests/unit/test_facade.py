"""Unit tests for the Messagr composition root."""

import pytest
from fakes import conversation_payload

from messagr.config import Config
from messagr.facade import Messagr, create_messagr
from messagr.platforms.models import PlatformId


def listing_by_platform(platform):
    if platform is PlatformId.SLACK:
        return {
            "Ok": [
                conversation_payload("s-old", "Slack", name="Design", last_message_at=10),
                conversation_payload("s-new", "Slack", name="Standup", last_message_at=30),
            ]
        }
    if platform is PlatformId.DISCORD:
        return {"Ok": [conversation_payload("d1", "Discord", name="Gaming", last_message_at=20)]}
    if platform is PlatformId.TWITTER:
        return {"Err": {"PlatformError": "suspended"}}
    return {"Ok": []}


@pytest.fixture
def messagr(remote, config):
    return create_messagr(remote, config)


class TestCreateMessagr:
    def test_with_explicit_config(self, remote, config):
        messagr = create_messagr(remote, config)

        assert isinstance(messagr, Messagr)
        assert messagr.config is config

    def test_loads_config_when_omitted(self, remote, mock_messagr_home, monkeypatch):
        monkeypatch.setenv("MESSAGR_SEARCH_LIMIT", "7")

        assert create_messagr(remote).config.search.limit == 7


class TestLoad:
    @pytest.mark.asyncio
    async def test_refresh_then_fetch(self, messagr, remote):
        remote.connected = [PlatformId.SLACK]
        remote.responses["get_conversations"] = listing_by_platform

        snapshot = await messagr.load()

        assert messagr.platforms.connected_platforms == (PlatformId.SLACK,)
        assert [c.id for c in snapshot.conversations] == ["s-old", "s-new", "d1"]
        assert snapshot.failed_platforms == [PlatformId.TWITTER]
        assert remote.calls[0][0] == "get_connected_platforms"


class TestSearch:
    @pytest.mark.asyncio
    async def test_configured_defaults(self, messagr, remote):
        await messagr.search("deadline", platform="slack")

        (_, kwargs) = remote.calls_to("advanced_search")[0]
        assert kwargs["sort_by"] == "relevance"
        assert kwargs["sort_direction"] == "desc"
        assert kwargs["limit"] == [50]
        assert kwargs["offset"] == [0]
        assert kwargs["platform"] == [PlatformId.SLACK]

    @pytest.mark.asyncio
    async def test_explicit_fields_win(self, remote):
        config = Config.model_validate({"search": {"sort_by": "date", "limit": 10}})
        messagr = create_messagr(remote, config)

        await messagr.search("deadline", sort_direction="asc", limit=None)

        (_, kwargs) = remote.calls_to("advanced_search")[0]
        assert kwargs["sort_by"] == "date"
        assert kwargs["sort_direction"] == "asc"
        assert kwargs["limit"] == []


class TestGetMessages:
    @pytest.mark.asyncio
    async def test_configured_page(self, messagr, remote):
        await messagr.get_messages("c1")

        ((_, limit, offset), _) = remote.calls_to("get_messages")[0]
        assert limit == [100]
        assert offset == [0]

    @pytest.mark.asyncio
    async def test_explicit_page(self, messagr, remote):
        await messagr.get_messages("c1", limit=10, offset=30)

        ((_, limit, offset), _) = remote.calls_to("get_messages")[0]
        assert limit == [10]
        assert offset == [30]


class TestPresent:
    @pytest.mark.asyncio
    async def test_defaults_to_last_activity_desc(self, messagr, remote):
        remote.responses["get_conversations"] = listing_by_platform
        await messagr.load()

        assert [c.id for c in messagr.present()] == ["s-new", "d1", "s-old"]

    @pytest.mark.asyncio
    async def test_filters_and_explicit_sort(self, messagr, remote):
        remote.responses["get_conversations"] = listing_by_platform
        await messagr.load()

        result = messagr.present(platform_filter="slack", sort_key="name", sort_direction="asc")

        assert [c.name for c in result] == ["Design", "Standup"]
