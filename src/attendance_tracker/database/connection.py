from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import mysql.connector
from mysql.connector import errors as mysql_errors

from ..core.constants import (
    DEFAULT_DB_CONNECT_RETRIES,
    DEFAULT_DB_CONNECTION_TIMEOUT,
    DEFAULT_DB_RETRY_BACKOFF_SECONDS,
)
from ..core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: int = DEFAULT_DB_CONNECTION_TIMEOUT
    connect_retries: int = DEFAULT_DB_CONNECT_RETRIES
    retry_backoff_seconds: float = DEFAULT_DB_RETRY_BACKOFF_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            connection_timeout=int(db_config.get("connection_timeout", DEFAULT_DB_CONNECTION_TIMEOUT)),
            connect_retries=int(db_config.get("connect_retries", DEFAULT_DB_CONNECT_RETRIES)),
            retry_backoff_seconds=float(db_config.get("retry_backoff_seconds", DEFAULT_DB_RETRY_BACKOFF_SECONDS)),
        )


class DatabaseConnection:
    """DB connection factory handed to every repository.

    Note: We create short-lived connections per operation. The owner (the
    container built at startup) decides the lifetime; there is no global
    instance.
    """

    def __init__(self, config: DBConfig, *, sleep=time.sleep):
        self._config = config
        self._sleep = sleep

    def _open(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connection_timeout),
        )

    def connect(self):
        attempts = max(1, int(self._config.connect_retries))
        delay = float(self._config.retry_backoff_seconds)
        for attempt in range(1, attempts + 1):
            try:
                return self._open()
            except (mysql_errors.InterfaceError, mysql_errors.OperationalError) as e:
                if attempt == attempts:
                    logger.error("database unreachable after %d attempts: %s", attempts, e)
                    raise StorageUnavailableError(str(e)) from e
                logger.warning("database connect failed (attempt %d/%d): %s", attempt, attempts, e)
                self._sleep(delay)
                delay *= 2
        raise StorageUnavailableError("database unreachable")
