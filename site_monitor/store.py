
# Append-only result store on top of Azure Table Storage.

# Rows are inserted, never updated: a second insert with the same
# (PartitionKey, RowKey) is a conflict reported by the service, and surfaces
# here as StorePersistenceError like any other storage failure.

import logging
from typing import Any

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.data.tables.aio import TableClient

from site_monitor.config import TABLE_NAME
from site_monitor.errors import ConfigurationError, StorePersistenceError
from site_monitor.models import LogEntity

log = logging.getLogger(__name__)


class ResultStore:

    def __init__(self, table: TableClient) -> None:
        self._table = table

    @classmethod
    def from_connection_string(cls, connection_string: str, table_name: str = TABLE_NAME) -> "ResultStore":
        try:
            table = TableClient.from_connection_string(connection_string, table_name=table_name)
        except ValueError as exc:
            raise ConfigurationError(f"Unusable store connection string: {exc}") from exc
        return cls(table)

    @property
    def table_name(self) -> str:
        return self._table.table_name

    async def ensure_table(self) -> bool:
        """
        Create the table if it does not exist yet.

        Returns True when this call created it. Safe to call repeatedly.
        """
        try:
            await self._table.create_table()
        except ResourceExistsError:
            return False
        except AzureError as exc:
            raise StorePersistenceError(f"Could not create table {self.table_name}: {exc}") from exc
        return True

    async def append(self, entity: LogEntity) -> dict[str, Any]:
        """Insert one row and return the service acknowledgement (etag, date, ...)."""
        try:
            ack = await self._table.create_entity(entity=entity.to_entity())
        except AzureError as exc:
            raise StorePersistenceError(
                f"Could not insert {entity.partition_key}/{entity.row_key} "
                f"into {self.table_name}: {exc}"
            ) from exc
        return dict(ack or {})

    async def close(self) -> None:
        await self._table.close()

    async def __aenter__(self) -> "ResultStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
