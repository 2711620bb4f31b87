"""Unit tests for paginated message reads."""

import pytest
from fakes import message_payload

from messagr.query.messages import MessageFeed
from messagr.remote.errors import AuthenticationRequiredError, InternalFailureError


@pytest.fixture
def feed(remote):
    return MessageFeed(remote)


class TestMessageFeed:
    """Tests for MessageFeed.get_messages."""

    @pytest.mark.asyncio
    async def test_paging_encoded(self, feed, remote):
        remote.responses["get_messages"] = {
            "Ok": [message_payload("m1"), message_payload("m2", timestamp=2000)]
        }

        messages = await feed.get_messages("c1", limit=20, offset=0)

        assert [m.id for m in messages] == ["m1", "m2"]
        ((conversation_id, limit, offset), _) = remote.calls_to("get_messages")[0]
        assert conversation_id == "c1"
        assert limit == [20]
        assert offset == [0]

    @pytest.mark.asyncio
    async def test_absent_paging(self, feed, remote):
        await feed.get_messages("c1")

        ((_, limit, offset), _) = remote.calls_to("get_messages")[0]
        assert limit == []
        assert offset == []

    @pytest.mark.asyncio
    async def test_error(self, feed, remote):
        remote.responses["get_messages"] = {"Err": {"NotAuthenticated": None}}

        with pytest.raises(AuthenticationRequiredError):
            await feed.get_messages("c1")

    @pytest.mark.asyncio
    async def test_malformed(self, feed, remote):
        remote.responses["get_messages"] = {"Ok": {"not": "a list"}}

        with pytest.raises(InternalFailureError, match="malformed get_messages response"):
            await feed.get_messages("c1")
