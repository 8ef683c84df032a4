# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: RetailDatabase.py
# -----------------------------------------------------------------------------
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, select, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from persistence.models import Account, Base
from utility.logging_utils import get_class_logger


class RetailDatabase:
    """
    Engine + session factory for the relational store.

    SQLite in-memory URLs share one connection so every session sees the
    same database.
    """

    def __init__(self, database_url: str, *, echo: bool = False, logger: logging.Logger | None = None) -> None:
        self.database_url = database_url
        self.logger = logger or get_class_logger(self.__class__)

        engine_kwargs: Dict[str, Any] = {"echo": echo}
        if database_url.startswith("sqlite"):
            # Handlers run on worker threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(database_url, **engine_kwargs)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

        self.logger.info("RetailDatabase initialised (url=%s)", database_url.split("@")[-1])

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)
        self.logger.info("Database schema ensured")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Transactional scope: commit on success, rollback on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_account(self, session: Session, account_id: str) -> Optional[Account]:
        return session.scalar(select(Account).where(Account.account_id == account_id))

    def test_connection(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            self.logger.error("Database connection failed: %s", e)
            return False
