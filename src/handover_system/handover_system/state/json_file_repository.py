from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ..core.exceptions import PersistenceError
from .model import HandoverState
from .repository import StateRepository
from .serialization import state_from_dict, state_to_dict

logger = logging.getLogger(__name__)


class JsonFileStateRepository(StateRepository):
    """Keeps the snapshot in a single JSON file (last write wins).

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace``, so a reader never sees a half-written file.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[HandoverState]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Cannot read {self._path}: {e}", code="STATE_READ_FAILED") from e

        try:
            return state_from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Corrupt state file {self._path}: {e}", code="STATE_READ_FAILED") from e

    def save(self, state: HandoverState) -> HandoverState:
        stored = replace(state, version=state.version + 1)
        payload = json.dumps(state_to_dict(stored), ensure_ascii=False, indent=2) + "\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".state-", suffix=".json", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Cannot write {self._path}: {e}", code="STATE_WRITE_FAILED") from e

        logger.debug("state saved to %s (version=%s)", self._path, stored.version)
        return stored
