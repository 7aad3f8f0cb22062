"""A flat keyed record store, partitioned by owner (the user identity)."""

import json
from typing import Any, Protocol

from databases import Database


CREATE_RECORDS_TABLE = """
CREATE TABLE IF NOT EXISTS Records (
    owner VARCHAR(256) NOT NULL,
    name VARCHAR(64) NOT NULL,
    value TEXT NOT NULL,
    PRIMARY KEY (owner, name)
)
"""


PUT_RECORD = """
INSERT INTO Records(owner, name, value) VALUES (:owner, :name, :value)
ON CONFLICT(owner, name) DO UPDATE SET value = excluded.value
"""


GET_RECORD = "SELECT value FROM Records WHERE owner = :owner AND name = :name"


DELETE_RECORD = "DELETE FROM Records WHERE owner = :owner AND name = :name"


LIST_RECORDS = "SELECT name FROM Records WHERE owner = :owner ORDER BY name"


class RecordStore(Protocol):
    async def get(self, owner: str, name: str) -> Any | None:
        ...

    async def put(self, owner: str, name: str, value: Any) -> None:
        ...

    async def delete(self, owner: str, name: str) -> None:
        ...

    async def names(self, owner: str) -> list[str]:
        ...


class MemoryRecordStore:
    """Keeps records as JSON text in a dict, same as the SQL store would."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], str] = {}

    async def get(self, owner: str, name: str) -> Any | None:
        value = self._records.get((owner, name))
        return None if value is None else json.loads(value)

    async def put(self, owner: str, name: str, value: Any) -> None:
        self._records[(owner, name)] = json.dumps(value, ensure_ascii=False)

    async def delete(self, owner: str, name: str) -> None:
        self._records.pop((owner, name), None)

    async def names(self, owner: str) -> list[str]:
        return sorted(name for o, name in self._records if o == owner)


class SqlRecordStore:
    def __init__(self, db: Database) -> None:
        self.db = db

    @classmethod
    def from_url(cls, url: str) -> "SqlRecordStore":
        return cls(Database(url))

    async def connect(self) -> None:
        await self.db.connect()
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            query=CREATE_RECORDS_TABLE
        )

    async def disconnect(self) -> None:
        await self.db.disconnect()

    async def get(self, owner: str, name: str) -> Any | None:
        result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            GET_RECORD, values={"owner": owner, "name": name}
        )
        if result is None:
            return None
        return json.loads(result["value"])

    async def put(self, owner: str, name: str, value: Any) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            PUT_RECORD,
            values={
                "owner": owner,
                "name": name,
                "value": json.dumps(value, ensure_ascii=False),
            },
        )

    async def delete(self, owner: str, name: str) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            DELETE_RECORD, values={"owner": owner, "name": name}
        )

    async def names(self, owner: str) -> list[str]:
        result = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_RECORDS, values={"owner": owner}
        )
        return [r["name"] for r in result]
