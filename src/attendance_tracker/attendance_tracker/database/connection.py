from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    """Connection settings for the attendance database.

    Built from the ``DB_CONFIG`` dict of the active settings module.
    """

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "attendance_tracker"
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, data: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(data.get("host") or defaults.host),
            port=int(data.get("port") or defaults.port),
            user=str(data.get("user") or defaults.user),
            password=str(data.get("password") or ""),
            database=str(data.get("database") or defaults.database),
            connect_timeout=int(data.get("connect_timeout") or defaults.connect_timeout),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "connection_timeout": self.connect_timeout,
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Hands out a fresh mysql-connector connection per repository call."""

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(**self.config.connect_kwargs())
