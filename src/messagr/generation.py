"""Generation stamping for latest-wins application of asynchronous results."""


class GenerationCounter:
    """Monotonically increasing counter owned by a single component.

    Each operation takes a generation with :meth:`next` before its first
    suspension point. When it completes, the owner asks whether its result
    may still be applied:

    - :meth:`is_current` - only the most recently issued generation wins.
    - :meth:`try_apply` - a result wins if nothing newer has been applied yet,
      so an older success is kept when every newer operation failed.

    All calls happen on the event loop thread, so no lock is needed.
    """

    def __init__(self) -> None:
        self._issued = 0
        self._applied = 0

    @property
    def latest(self) -> int:
        """The most recently issued generation (0 before the first)."""
        return self._issued

    @property
    def applied(self) -> int:
        """The generation whose result was applied last (0 if none)."""
        return self._applied

    def next(self) -> int:
        """Issue a new generation."""
        self._issued += 1
        return self._issued

    def is_current(self, generation: int) -> bool:
        """Check whether ``generation`` is still the latest issued."""
        return generation == self._issued

    def try_apply(self, generation: int) -> bool:
        """Record ``generation`` as applied unless a newer one already was.

        Returns:
            True if the caller should apply its result.
        """
        if generation <= self._applied:
            return False
        self._applied = generation
        return True
