"""Registry of connected platforms and their connection lifecycle."""

import logging
from typing import Any

from pydantic import TypeAdapter

from messagr.generation import GenerationCounter
from messagr.platforms.models import AuthConfig, PlatformId, PlatformState
from messagr.platforms.protocol import RemoteClient
from messagr.remote.errors import FacadeError, InternalFailureError, InvalidInputError
from messagr.remote.results import call_remote, parse_payload

logger = logging.getLogger(__name__)

_CONNECT_RESULT = TypeAdapter(str)
_BOOL_RESULT = TypeAdapter(bool)
_COUNT_RESULT = TypeAdapter(int)


class PlatformRegistry:
    """Tracks which platforms are connected for the current caller.

    Membership is only ever replaced wholesale by the list the remote
    endpoint reports through ``get_connected_platforms``:

    1. ``connect``/``disconnect`` call the remote operation
    2. On success, the full connected list is re-read
    3. The re-read list replaces local state, unless a newer lifecycle
       operation has already applied its own list

    Nothing is added or removed optimistically, and a failed operation
    leaves membership untouched.

    Known race: the confirm and re-read steps are two separate round trips.
    A lifecycle change made by another client between them is reflected in
    the re-read list, but a re-read that loses the latest-wins check is
    dropped even when it carried newer remote state.
    """

    def __init__(self, remote: RemoteClient) -> None:
        """Initialize the registry.

        Args:
            remote: The remote endpoint capability
        """
        self._remote = remote
        self._connected: tuple[PlatformId, ...] = ()
        self._pending: dict[PlatformId, tuple[PlatformState, int]] = {}
        self._generations = GenerationCounter()

    @property
    def connected_platforms(self) -> tuple[PlatformId, ...]:
        """Platforms connected as of the last applied refresh."""
        return self._connected

    @property
    def is_busy(self) -> bool:
        """Check if a connect or disconnect is in flight."""
        return bool(self._pending)

    def is_connected(self, platform: PlatformId | str) -> bool:
        return PlatformId.parse(platform) in self._connected

    def state(self, platform: PlatformId | str) -> PlatformState:
        """Get the lifecycle state of a platform.

        A transitional state is reported while an operation is in flight,
        otherwise the state follows membership.
        """
        platform = PlatformId.parse(platform)
        pending = self._pending.get(platform)
        if pending is not None:
            return pending[0]
        if platform in self._connected:
            return PlatformState.CONNECTED
        return PlatformState.DISCONNECTED

    async def refresh(self) -> tuple[PlatformId, ...]:
        """Re-read the connected list from the remote endpoint.

        Returns:
            The list the remote reported, whether or not it was applied
        """
        generation = self._generations.next()
        platforms = await self._fetch_connected()
        self._apply(generation, platforms)
        return platforms

    async def connect(self, config: AuthConfig | dict[str, Any]) -> str:
        """Connect a platform.

        Args:
            config: Credentials for the platform

        Returns:
            The remote's confirmation message

        Raises:
            FacadeError: If the connect or the follow-up refresh fails
        """
        if not isinstance(config, AuthConfig):
            config = _parse_auth_config(config)

        platform = config.platform
        generation = self._begin(platform, PlatformState.CONNECTING)
        logger.info(f"Connecting platform: {platform}")

        try:
            payload = await call_remote(
                "connect_platform", self._remote.connect_platform(config.to_wire())
            )
            result = parse_payload(_CONNECT_RESULT, payload, "connect_platform")
            platforms = await self._fetch_connected()
        except FacadeError as e:
            logger.error(f"Error connecting {platform}: {e}")
            raise
        finally:
            self._end(platform, generation)

        self._apply(generation, platforms)
        logger.info(f"Connected platform: {platform}")
        return result

    async def disconnect(self, platform: PlatformId | str) -> bool:
        """Disconnect a platform.

        Args:
            platform: The platform to disconnect

        Returns:
            The remote's confirmation flag

        Raises:
            FacadeError: If the disconnect or the follow-up refresh fails
        """
        platform = PlatformId.parse(platform)
        generation = self._begin(platform, PlatformState.DISCONNECTING)
        logger.info(f"Disconnecting platform: {platform}")

        try:
            payload = await call_remote(
                "disconnect_platform", self._remote.disconnect_platform(platform)
            )
            result = parse_payload(_BOOL_RESULT, payload, "disconnect_platform")
            platforms = await self._fetch_connected()
        except FacadeError as e:
            logger.error(f"Error disconnecting {platform}: {e}")
            raise
        finally:
            self._end(platform, generation)

        self._apply(generation, platforms)
        logger.info(f"Disconnected platform: {platform}")
        return result

    async def sync(self, platform: PlatformId | str) -> int:
        """Pull new messages for a platform.

        Does not change membership.

        Returns:
            Number of messages synced
        """
        platform = PlatformId.parse(platform)
        try:
            payload = await call_remote("sync_messages", self._remote.sync_messages(platform))
            count = parse_payload(_COUNT_RESULT, payload, "sync_messages")
        except FacadeError as e:
            logger.error(f"Error syncing {platform} messages: {e}")
            raise

        logger.info(f"Synced {count} messages from {platform}")
        return count

    async def _fetch_connected(self) -> tuple[PlatformId, ...]:
        raw = await call_remote(
            "get_connected_platforms", self._remote.get_connected_platforms(), tagged=False
        )
        if not isinstance(raw, (list, tuple)):
            raise InternalFailureError("malformed get_connected_platforms response")

        platforms: list[PlatformId] = []
        for item in raw:
            try:
                platform = PlatformId.parse(item)
            except InvalidInputError as e:
                raise InternalFailureError(
                    f"malformed get_connected_platforms response: {e.detail}"
                ) from e
            if platform not in platforms:
                platforms.append(platform)
        return tuple(platforms)

    def _begin(self, platform: PlatformId, state: PlatformState) -> int:
        generation = self._generations.next()
        self._pending[platform] = (state, generation)
        return generation

    def _end(self, platform: PlatformId, generation: int) -> None:
        # A newer operation on the same platform owns the transitional state
        pending = self._pending.get(platform)
        if pending is not None and pending[1] == generation:
            del self._pending[platform]

    def _apply(self, generation: int, platforms: tuple[PlatformId, ...]) -> None:
        if self._generations.try_apply(generation):
            self._connected = platforms
        else:
            logger.debug(f"Discarding stale platform list from generation {generation}")


def _parse_auth_config(data: dict[str, Any]) -> AuthConfig:
    try:
        return AuthConfig.model_validate(data)
    except ValueError as e:
        raise InvalidInputError(f"invalid auth config: {e}") from e
