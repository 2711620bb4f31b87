"""Data models for connected platforms and their conversations."""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field

from messagr.remote.codec import decode_optional, encode_optional
from messagr.remote.errors import InvalidInputError


class PlatformId(str, Enum):
    """Closed set of messaging platforms the remote endpoint knows about."""

    TELEGRAM = "Telegram"
    SLACK = "Slack"
    DISCORD = "Discord"
    TWITTER = "Twitter"
    FACEBOOK = "Facebook"
    WHATSAPP = "WhatsApp"

    @classmethod
    def parse(cls, value: Any) -> "PlatformId":
        """Map a platform identifier to its enum member.

        Accepts a member, a case-insensitive name ("slack", "WHATSAPP") or
        the remote's variant encoding (``{"Slack": None}``).

        Raises:
            InvalidInputError: If the value names no known platform.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, dict) and len(value) == 1:
            (value,) = value.keys()
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise InvalidInputError(f"Unknown platform: {value!r}")

    def __str__(self) -> str:
        return self.value


# Fan-out order used by the conversation aggregator
KNOWN_PLATFORMS: tuple[PlatformId, ...] = tuple(PlatformId)


class PlatformState(str, Enum):
    """Connection lifecycle of a single platform."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


# =============================================================================
# Wire field types
# =============================================================================


def _validate_platform(value: Any) -> PlatformId:
    try:
        return PlatformId.parse(value)
    except InvalidInputError as e:
        raise ValueError(str(e)) from e


def decode_wire_optional(value: Any) -> Any:
    """Accept an optional either natively or as a zero-or-one-element sequence."""
    if isinstance(value, (list, tuple)):
        try:
            return decode_optional(value)
        except InvalidInputError as e:
            raise ValueError(str(e)) from e
    return value


PlatformField = Annotated[PlatformId, BeforeValidator(_validate_platform)]
OptionalStr = Annotated[Optional[str], BeforeValidator(decode_wire_optional)]
OptionalInt = Annotated[Optional[int], BeforeValidator(decode_wire_optional)]
OptionalFloat = Annotated[Optional[float], BeforeValidator(decode_wire_optional)]


# =============================================================================
# Payload models
# =============================================================================


class Participant(BaseModel):
    """A user taking part in a conversation."""

    id: str
    name: str
    platform: PlatformField
    avatar_url: OptionalStr = None


class Attachment(BaseModel):
    attachment_type: str
    name: OptionalStr = None
    url: OptionalStr = None


class MessageContent(BaseModel):
    text: str = ""
    attachments: list[Attachment] = Field(default_factory=list)


class Message(BaseModel):
    """A single message as stored by the remote endpoint."""

    id: str
    conversation_id: str
    platform: PlatformField
    sender: Participant
    content: MessageContent = Field(default_factory=MessageContent)
    timestamp: int
    edited: bool = False
    thread_id: OptionalStr = None
    reply_to: OptionalStr = None  # id of the message replied to

    def __str__(self) -> str:
        """String representation for logging."""
        return f"[{self.platform.value}] {self.sender.name}: {self.content.text[:50]}"


class Conversation(BaseModel):
    """A conversation on one platform."""

    id: str
    platform: PlatformField
    name: str
    participants: list[Participant] = Field(default_factory=list)
    created_at: int
    last_message_at: OptionalInt = None


AUTH_OPTIONAL_FIELDS = ("api_key", "api_secret", "redirect_uri")


class AuthConfig(BaseModel):
    """Credentials submitted when connecting a platform."""

    platform: PlatformField
    token: str
    api_key: OptionalStr = None
    api_secret: OptionalStr = None
    redirect_uri: OptionalStr = None

    def to_wire(self) -> dict[str, Any]:
        """Encode for the remote connect operation."""
        wire: dict[str, Any] = {"platform": self.platform, "token": self.token}
        for name in AUTH_OPTIONAL_FIELDS:
            wire[name] = encode_optional(getattr(self, name))
        return wire

    def __repr__(self) -> str:
        return f"AuthConfig(platform={self.platform.value!r}, token='***')"
