"""Decide once per process which persistence variant serves the stores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.constants import PLACEHOLDER_PREFIXES
from ..core.enums import BackendKind
from ..core.exceptions import ConfigurationError
from ..database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("host", "user", "password", "database")


@dataclass(frozen=True)
class BackendDecision:
    remote_available: bool
    reason: Optional[str] = None

    @property
    def kind(self) -> BackendKind:
        return BackendKind.REMOTE if self.remote_available else BackendKind.FALLBACK

    @property
    def using_fallback(self) -> bool:
        return not self.remote_available


def _is_placeholder(value: str) -> bool:
    return any(value.upper().startswith(prefix) for prefix in PLACEHOLDER_PREFIXES)


def validate_remote_config(db_config: Optional[dict]) -> DBConfig:
    if not db_config:
        raise ConfigurationError("Remote store not configured")

    for field in _REQUIRED_FIELDS:
        value = db_config.get(field)
        if field != "password" and not value:
            raise ConfigurationError(f"Remote store setting '{field}' is missing")
        if value and _is_placeholder(str(value)):
            raise ConfigurationError(f"Remote store setting '{field}' is a placeholder")

    try:
        return DBConfig.from_dict(db_config)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed remote store settings: {e}") from e


def _ping(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect()
    try:
        conn.ping(reconnect=False)
    finally:
        conn.close()


class BackendSelector:
    """Resolve remote availability on first use and never revisit it.

    A failed probe degrades to the local fallback for the rest of the process;
    there is no retry.
    """

    def __init__(
        self,
        db_config: Optional[dict],
        *,
        probe: Optional[Callable[[DatabaseConnection], None]] = None,
    ):
        self._db_config = db_config
        self._probe = probe or _ping
        self._decision: Optional[BackendDecision] = None
        self._conn_factory: Optional[DatabaseConnection] = None

    @property
    def connection_factory(self) -> Optional[DatabaseConnection]:
        """Connection factory for the remote store, once it proved reachable."""
        return self._conn_factory

    def resolve(self) -> BackendDecision:
        if self._decision is None:
            self._decision = self._decide()
        return self._decision

    def _decide(self) -> BackendDecision:
        try:
            config = validate_remote_config(self._db_config)
            conn_factory = DatabaseConnection(config)
            try:
                self._probe(conn_factory)
            except Exception as e:
                raise ConfigurationError(f"Remote store unreachable: {e}") from e
        except ConfigurationError as e:
            logger.warning("%s. Using local storage for data persistence.", e)
            return BackendDecision(remote_available=False, reason=str(e))

        self._conn_factory = conn_factory
        logger.info("Remote document store ready at %s:%s/%s", config.host, config.port, config.database)
        return BackendDecision(remote_available=True)
