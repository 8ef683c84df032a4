# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: seed_retail.py
# -----------------------------------------------------------------------------
"""
Seed one tenant from an online-retail CSV.

    python -m scripts.seed_retail --csv data/online_retail_II.csv --limit 200 [--no-embed]
"""
import argparse
import sys

import settings
from config.Config import Config
from embedding.RetailEmbedder import RetailEmbedder
from ingestion.RetailSeeder import RetailSeeder
from persistence.RetailDatabase import RetailDatabase
from utility.logging_utils import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed retail records and the search index from a CSV file.")
    parser.add_argument("--csv", required=True, help="Path to the CSV file")
    parser.add_argument("--account-id", default=None, help="Tenant id (default: RETAIL_ACCOUNT_ID)")
    parser.add_argument("--limit", type=int, default=settings.SEED_ROW_LIMIT, help="Max rows to seed")
    parser.add_argument(
        "--no-embed",
        dest="embed",
        action="store_false",
        help="Skip description embeddings (vector search will only match on keywords)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    cfg = Config.from_env()
    logger.info("Seeding with config: %s", cfg.summary())

    database = RetailDatabase(cfg.database_url)
    database.create_all()

    embedder = RetailEmbedder(cfg=cfg) if args.embed else None
    seeder = RetailSeeder(database, embedder=embedder)

    try:
        count = seeder.seed(
            args.csv,
            account_id=args.account_id or cfg.account_id,
            limit=args.limit,
            embed=args.embed,
        )
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1

    logger.info("Seeding complete: %d rows", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
