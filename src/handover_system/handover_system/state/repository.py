from __future__ import annotations

from typing import Optional, Protocol

from .model import HandoverState


class StateRepository(Protocol):
    def load(self) -> Optional[HandoverState]:
        """Return the stored snapshot, or None when nothing was stored yet.

        Raises PersistenceError when the store cannot be read.
        """

        raise NotImplementedError

    def save(self, state: HandoverState) -> HandoverState:
        """Store ``state`` as a whole and return it with its new version.

        ``state.version`` is the version the caller read; stores that check it
        raise PersistenceError(code="STATE_CONFLICT") when it is stale.
        """

        raise NotImplementedError
