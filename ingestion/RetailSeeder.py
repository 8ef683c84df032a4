# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: RetailSeeder
# -----------------------------------------------------------------------------
import logging
import time
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from sqlalchemy import delete

import settings
from ingestion.RetailCsvLoader import RetailCsvLoader, RetailRow
from persistence.RetailDatabase import RetailDatabase
from persistence.models import Account, RetailRecord
from searchindex.RetailIndexAdapter import RetailIndexAdapter
from utility.errors import EmbeddingError
from utility.logging_utils import get_class_logger


class BatchEmbedder(Protocol):
    dimensions: int

    def embed_texts(self, texts: Sequence[str]) -> Optional[List[List[float]]]:
        ...


class RetailSeeder:
    """
    Rebuilds one tenant from a CSV:
      1. delete the tenant's retail records and account
      2. create the account and an empty search index
      3. per row: insert a RetailRecord and a search document (index persisted each time)

    Descriptions are embedded up front unless embed=False.
    """

    def __init__(
            self,
            database: RetailDatabase,
            *,
            embedder: Optional[BatchEmbedder] = None,
            csv_loader: Optional[RetailCsvLoader] = None,
            logger: logging.Logger | None = None,
    ) -> None:
        self.database = database
        self.embedder = embedder
        self.csv_loader = csv_loader or RetailCsvLoader()
        self.logger = logger or get_class_logger(self.__class__)

    def reset_account(self, account_id: str) -> None:
        with self.database.session() as session:
            session.execute(delete(RetailRecord).where(RetailRecord.account_id == account_id))
            session.execute(delete(Account).where(Account.account_id == account_id))
            session.add(Account(account_id=account_id))
        self.logger.info("Reset account '%s'", account_id)

    def seed(
            self,
            csv_path: str | Path,
            account_id: str = settings.DEFAULT_ACCOUNT_ID,
            limit: int = settings.SEED_ROW_LIMIT,
            embed: bool = True,
    ) -> int:
        start_time = time.time()
        rows = self.csv_loader.load(csv_path, limit=limit)

        embeddings: Optional[List[List[float]]] = None
        if embed:
            embeddings = self._embed_rows(rows)

        self.reset_account(account_id)

        adapter_kwargs = {}
        if self.embedder is not None:
            adapter_kwargs["embedding_dimensions"] = self.embedder.dimensions
        adapter = RetailIndexAdapter(account_id, database=self.database, **adapter_kwargs)
        adapter.initialize()

        for i, row in enumerate(rows):
            record = self._to_record(row, account_id)
            with self.database.session() as session:
                session.add(record)

            document = record.to_search_document()
            if embeddings is not None:
                document["embeddings"] = embeddings[i]
            try:
                adapter.insert(document)
            except Exception as e:
                # the RetailRecord above is already committed
                self.logger.error(
                    "Index insert failed at row %d/%d (invoice=%s stock_code=%s): %s",
                    i + 1, len(rows), row.invoice, row.stock_code, e,
                )
                raise

            self.logger.debug("Seeded row %d/%d (invoice=%s)", i + 1, len(rows), row.invoice)

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info("Seeded %d rows into account '%s' (%.1f ms)", len(rows), account_id, elapsed)
        return len(rows)

    def _embed_rows(self, rows: List[RetailRow]) -> List[List[float]]:
        if self.embedder is None:
            raise EmbeddingError("Seeding with embeddings requires an embedder (pass embed=False to skip)")
        if not rows:
            return []

        embeddings = self.embedder.embed_texts([row.description for row in rows])
        if not embeddings:
            raise EmbeddingError("Failed to get embeddings")
        if len(embeddings) != len(rows):
            raise EmbeddingError(f"Expected {len(rows)} embeddings, got {len(embeddings)}")
        return embeddings

    @staticmethod
    def _to_record(row: RetailRow, account_id: str) -> RetailRecord:
        return RetailRecord(
            account_id=account_id,
            invoice=row.invoice,
            stock_code=row.stock_code,
            description=row.description,
            quantity=row.quantity,
            invoice_date=row.invoice_date,
            price=row.price,
            customer_id=row.customer_id,
            country=row.country,
        )
