# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: RetailCsvLoader
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from utility.logging_utils import get_class_logger

REQUIRED_COLUMNS = (
    "Invoice",
    "StockCode",
    "Description",
    "Quantity",
    "InvoiceDate",
    "Price",
    "Customer ID",
    "Country",
)


@dataclass(frozen=True)
class RetailRow:
    invoice: str
    stock_code: str
    description: str
    quantity: int
    invoice_date: datetime
    price: float
    customer_id: str
    country: str


class RetailCsvLoader:
    """
    Reads an online-retail style CSV into typed rows.

    Rows whose Quantity, Price or InvoiceDate cannot be parsed are skipped
    with a warning; a missing column fails the whole load.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_class_logger(self.__class__)

    def load(self, csv_path: str | Path, limit: Optional[int] = None) -> List[RetailRow]:
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")

        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"CSV is missing required columns: {missing}")

        if limit is not None:
            df = df.head(limit)

        rows: List[RetailRow] = []
        for line_no, rec in enumerate(df.to_dict(orient="records"), start=2):
            try:
                rows.append(self._to_row(rec))
            except (TypeError, ValueError) as e:
                self.logger.warning("Skipping CSV line %d: %s", line_no, e)

        self.logger.info("Loaded %d/%d rows from %s", len(rows), len(df), path)
        return rows

    @staticmethod
    def _to_row(rec: dict) -> RetailRow:
        invoice_date = pd.to_datetime(rec["InvoiceDate"].strip())
        if pd.isna(invoice_date):
            raise ValueError(f"Invalid InvoiceDate: {rec['InvoiceDate']!r}")

        return RetailRow(
            invoice=rec["Invoice"].strip(),
            stock_code=rec["StockCode"].strip(),
            description=rec["Description"].strip(),
            quantity=int(float(rec["Quantity"])),
            invoice_date=invoice_date.to_pydatetime().replace(tzinfo=None),
            price=float(rec["Price"]),
            customer_id=rec["Customer ID"].strip(),
            country=rec["Country"].strip(),
        )
