from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "attendance_payroll"

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(raw.get("host") or defaults.host),
            port=int(raw.get("port") or defaults.port),
            user=str(raw.get("user") or defaults.user),
            password=str(raw.get("password") or ""),
            database=str(raw.get("database") or defaults.database),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Hands out a fresh connection per unit of work; repositories share one factory."""

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, with_database: bool = True):
        params: dict[str, Any] = {
            "host": self._config.host,
            "port": self._config.port,
            "user": self._config.user,
            "password": self._config.password,
            "time_zone": "+00:00",
        }
        if with_database:
            params["database"] = self._config.database
        return mysql.connector.connect(**params)
