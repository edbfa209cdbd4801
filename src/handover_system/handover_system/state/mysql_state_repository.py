from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Optional

import mysql.connector

from ..core.constants import STATE_KEY
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, persistence_errors
from .model import HandoverState
from .repository import StateRepository
from .serialization import state_from_dict, state_to_dict

logger = logging.getLogger(__name__)


class MySQLStateRepository(StateRepository):
    """Stores the snapshot as a JSON document in ``handover_state``.

    Writes are version-checked: a save based on a stale read is rejected with
    ``STATE_CONFLICT`` instead of silently overwriting a newer state.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, state_key: str = STATE_KEY):
        self._conn_factory = conn_factory
        self._state_key = state_key

    def load(self) -> Optional[HandoverState]:
        with persistence_errors("STATE_READ_FAILED"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT payload, version
                    FROM handover_state
                    WHERE state_key=%s
                    """,
                    (self._state_key,),
                )
                r = fetchone(cur)

        if not r:
            return None
        try:
            state = state_from_dict(json.loads(r["payload"]))
        except (ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Corrupt state row {self._state_key!r}: {e}", code="STATE_READ_FAILED") from e
        return replace(state, version=int(r["version"]))

    def save(self, state: HandoverState) -> HandoverState:
        stored = replace(state, version=state.version + 1)
        payload = json.dumps(state_to_dict(stored), ensure_ascii=False)

        with persistence_errors("STATE_WRITE_FAILED"):
            with db_cursor(self._conn_factory) as (_, cur):
                if state.version == 0:
                    try:
                        cur.execute(
                            """
                            INSERT INTO handover_state(state_key, payload, version)
                            VALUES(%s,%s,%s)
                            """,
                            (self._state_key, payload, stored.version),
                        )
                    except mysql.connector.IntegrityError as e:
                        raise PersistenceError("State was created concurrently", code="STATE_CONFLICT") from e
                else:
                    cur.execute(
                        """
                        UPDATE handover_state
                        SET payload=%s, version=%s
                        WHERE state_key=%s AND version=%s
                        """,
                        (payload, stored.version, self._state_key, state.version),
                    )
                    if cur.rowcount == 0:
                        raise PersistenceError("State was modified concurrently", code="STATE_CONFLICT")

        logger.debug("state %r saved (version=%s)", self._state_key, stored.version)
        return stored
