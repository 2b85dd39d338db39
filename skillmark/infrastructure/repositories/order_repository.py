import csv
import io
import logging
import os
import sys
from contextlib import closing
from dataclasses import dataclass
from typing import Iterator, List, Optional

from fastapi.concurrency import run_in_threadpool

from skillmark.domain.errors import StorageError
from skillmark.domain.models import ORDER_FIELDS, Order
from skillmark.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)

SAVE_ERROR = "Could not save order"
READ_ERROR = "Could not read orders"


def raise_field_size_limit():
    """Let the reader accept any field the writer produced (default cap is 128 KiB)."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return limit
        except OverflowError:
            # C long is 32 bits on some platforms
            limit //= 10


raise_field_size_limit()


@dataclass(frozen=True)
class StoreConfig:
    csv_path: str
    encoding: str = "utf-8"


def format_csv_line(values: List[str]) -> str:
    """Render one CSV record, quoting fields that hold a comma, quote or newline."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(values)
    return buffer.getvalue()


class CsvOrderRepository(IOrderRepository):
    """
    Append-only order store backed by a single CSV file.
    The async methods push the blocking file work to FastAPI's threadpool.
    There is no locking: concurrent appends land in whatever order the OS gives them.
    """

    def __init__(self, config: StoreConfig):
        self.config = config

    @property
    def path(self) -> str:
        return self.config.csv_path

    # --- async API (used by the service layer) ---

    async def initialize(self) -> None:
        await run_in_threadpool(self.initialize_sync)

    async def append(self, order: Order) -> None:
        await run_in_threadpool(self.append_sync, order)

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        return await run_in_threadpool(self.find_by_id_sync, order_id)

    # --- blocking implementations ---

    def initialize_sync(self) -> None:
        """Create the file with its header row. Does nothing if it already exists."""
        if os.path.exists(self.path):
            logger.info(f"Orders file already present: {self.path}")
            return

        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            # "x" refuses to clobber a file created since the exists() check
            with open(self.path, "x", encoding=self.config.encoding, newline="") as handle:
                handle.write(format_csv_line(ORDER_FIELDS))
        except FileExistsError:
            return
        except OSError as e:
            logger.error(f"Could not create orders file {self.path}: {e}", exc_info=True)
            raise StorageError(SAVE_ERROR) from e

        logger.info(f"Created orders file: {self.path}")

    def append_sync(self, order: Order) -> None:
        if not os.path.exists(self.path):
            self.initialize_sync()

        line = format_csv_line(order.to_row())
        try:
            # One write per record so rows from racing requests don't mix
            with open(self.path, "a", encoding=self.config.encoding, newline="") as handle:
                handle.write(line)
        except (OSError, UnicodeError) as e:
            logger.error(f"Error writing CSV: {e}", exc_info=True)
            raise StorageError(SAVE_ERROR) from e

    def iter_orders(self) -> Iterator[Order]:
        """
        Lazily yield every well-formed record, in file order.
        Rows with the wrong number of columns are skipped and logged.
        The file stays open until the generator is exhausted or closed.
        """
        try:
            handle = open(self.path, "r", encoding=self.config.encoding, newline="")
        except OSError as e:
            logger.error(f"CSV read error: {e}", exc_info=True)
            raise StorageError(READ_ERROR) from e

        with handle:
            reader = csv.reader(handle)
            try:
                header = next(reader, None)
                if header != ORDER_FIELDS:
                    logger.error(f"Unexpected header in {self.path}: {header}")
                    raise StorageError(READ_ERROR)

                for row in reader:
                    if not row:
                        continue
                    if len(row) != len(ORDER_FIELDS):
                        logger.warning(
                            f"Skipping malformed row at line {reader.line_num} of {self.path} "
                            f"({len(row)} columns)"
                        )
                        continue
                    yield Order(**dict(zip(ORDER_FIELDS, row)))
            except (csv.Error, OSError, UnicodeDecodeError) as e:
                logger.error(f"CSV read error: {e}", exc_info=True)
                raise StorageError(READ_ERROR) from e

    def find_by_id_sync(self, order_id: str) -> Optional[Order]:
        """First record whose orderId matches exactly, or None. Linear scan, no index."""
        with closing(self.iter_orders()) as orders:
            for order in orders:
                if order.order_id == order_id:
                    return order
        return None
