"""Paginated message reads for a single conversation."""

import logging
from typing import Optional

from pydantic import TypeAdapter

from messagr.platforms.models import Message
from messagr.platforms.protocol import RemoteClient
from messagr.remote.codec import encode_optional
from messagr.remote.errors import FacadeError
from messagr.remote.results import call_remote, parse_payload

logger = logging.getLogger(__name__)

_MESSAGE_LIST = TypeAdapter(list[Message])


class MessageFeed:
    """Reads pages of messages from the remote endpoint."""

    def __init__(self, remote: RemoteClient) -> None:
        self._remote = remote

    async def get_messages(
        self,
        conversation_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Message]:
        """Read one page of a conversation's messages.

        Args:
            conversation_id: The conversation to read
            limit: Page size; None lets the remote decide
            offset: Number of messages to skip; None lets the remote decide

        Returns:
            The messages in the page
        """
        try:
            payload = await call_remote(
                "get_messages",
                self._remote.get_messages(
                    conversation_id, encode_optional(limit), encode_optional(offset)
                ),
            )
            messages = parse_payload(_MESSAGE_LIST, payload, "get_messages")
        except FacadeError as e:
            logger.error(f"Error fetching messages for {conversation_id}: {e}")
            raise

        logger.debug(f"Fetched {len(messages)} messages for {conversation_id}")
        return messages
