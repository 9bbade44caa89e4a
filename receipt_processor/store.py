import asyncio
import logging
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel.ext.asyncio.session import AsyncSession

from receipt_processor.models import Receipt, ReceiptRecord


logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Exception raised when the receipt store cannot complete an operation."""

    pass


class ReceiptStore(Protocol):
    """Persists receipts and retrieves them by identifier.

    Stored receipts are never updated; the store only adds and reads.
    """

    async def add(self, receipt_id: str, receipt: Receipt) -> None: ...

    async def get(self, receipt_id: str) -> Optional[Receipt]: ...


class InMemoryReceiptStore:
    """Receipt store kept in a process-local dict. Used by tests and local runs."""

    def __init__(self):
        self._receipts: dict[str, Receipt] = {}

    async def add(self, receipt_id: str, receipt: Receipt) -> None:
        if receipt_id in self._receipts:
            raise StorageError(f"Receipt {receipt_id} already exists")
        self._receipts[receipt_id] = receipt

    async def get(self, receipt_id: str) -> Optional[Receipt]:
        return self._receipts.get(receipt_id)

    def __len__(self) -> int:
        return len(self._receipts)


class SQLReceiptStore:
    """Receipt store backed by the `receipts` table.

    Every operation opens its own session on the shared engine, so the store can
    be used from concurrent requests. Operations that take longer than
    `timeout` seconds are abandoned.

    Attributes:
        engine (AsyncEngine): The engine whose connection pool the store uses.
        timeout (float): Upper bound in seconds for a single operation.
    """

    def __init__(self, engine: AsyncEngine, timeout: float = 10.0):
        self.engine = engine
        self.timeout = timeout

    async def _run(self, operation, description: str):
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Timed out after {self.timeout}s while {description}")
            raise StorageError(f"Timed out while {description}")
        except (SQLAlchemyError, OSError) as ex:
            logger.error(f"Storage error while {description}: {ex}")
            raise StorageError(f"Storage error while {description}: {ex}")

    async def _insert(self, record: ReceiptRecord) -> None:
        async with AsyncSession(self.engine) as session:
            session.add(record)
            await session.commit()

    async def _select(self, receipt_id: str) -> Optional[Receipt]:
        async with AsyncSession(self.engine) as session:
            record = await session.get(ReceiptRecord, receipt_id)
            return record.to_receipt() if record else None

    async def add(self, receipt_id: str, receipt: Receipt) -> None:
        record = ReceiptRecord.from_receipt(receipt_id, receipt)
        await self._run(self._insert(record), f"saving receipt {receipt_id}")

    async def get(self, receipt_id: str) -> Optional[Receipt]:
        return await self._run(self._select(receipt_id), f"loading receipt {receipt_id}")
