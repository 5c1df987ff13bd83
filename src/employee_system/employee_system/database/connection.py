from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: Optional[int] = None

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        pool_size = db_config.get("pool_size")
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "employee_db")),
            pool_size=int(pool_size) if pool_size else None,
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict[str, Any]:
        kwargs: dict[str, Any] = dict(host=self.host, port=self.port, user=self.user, password=self.password)
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Hands out one short-lived connection per repository call.

    With ``pool_size`` set, connections come from a named mysql-connector pool
    and ``close()`` returns them to it.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        kwargs = self._config.connect_kwargs()
        if self._config.pool_size:
            kwargs.update(pool_name=f"ems_{self._config.database}", pool_size=self._config.pool_size)
        return mysql.connector.connect(**kwargs)
