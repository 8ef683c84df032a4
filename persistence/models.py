# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: models.py
# -----------------------------------------------------------------------------
"""Relational models: one Account per tenant, many RetailRecords per Account."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


class Account(Base):
    """Tenant row. search_index holds the serialized search index blob."""
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, default=_new_id)
    account_id = Column(String(255), nullable=False, unique=True)
    search_index = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    retail_records = relationship("RetailRecord", back_populates="account", cascade="all, delete-orphan")


class RetailRecord(Base):
    """One retail transaction line."""
    __tablename__ = "retail_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(255), ForeignKey("accounts.account_id"), nullable=False)
    invoice = Column(String(64), nullable=False)
    stock_code = Column(String(64), nullable=False)
    description = Column(Text, nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    invoice_date = Column(DateTime, nullable=False)
    price = Column(Float, nullable=False)
    customer_id = Column(String(64), nullable=False, default="")
    country = Column(String(128), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    account = relationship("Account", back_populates="retail_records")

    __table_args__ = (
        Index("idx_retail_records_account_id", "account_id"),
    )

    def to_search_document(self) -> dict:
        """Project the row onto the search index schema (without embeddings)."""
        return {
            "invoice": self.invoice,
            "stockCode": self.stock_code,
            "description": self.description or "",
            "quantity": self.quantity,
            "invoiceDate": self.invoice_date.isoformat(),
            "price": self.price,
            "customerId": self.customer_id or "",
            "country": self.country or "",
        }
