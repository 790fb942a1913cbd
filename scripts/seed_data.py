import argparse
import logging

from sqlalchemy import delete, select

from inventory_api.config import get_settings
from inventory_api.core.logging import setup_logging
from inventory_api.database import build_engine, build_session_factory, init_db
from inventory_api.models.product import Product
from inventory_api.services.product_service import create_product

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Mouse",
        "description": "Two-button optical mouse with USB receiver",
        "stock_quantity": 42,
        "low_stock_threshold": 10,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "Tenkeyless keyboard with brown switches",
        "stock_quantity": 6,
        "low_stock_threshold": 8,
    },
    {
        "name": "USB-C Cable",
        "description": "1 m braided USB-C to USB-C cable",
        "stock_quantity": 15,
        "low_stock_threshold": 15,
    },
    {
        "name": "Laptop Stand",
        "description": "Adjustable aluminium stand for 11-17 inch laptops",
        "stock_quantity": 0,
        "low_stock_threshold": 3,
    },
]


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample products.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing products before seeding.",
    )
    return parser.parse_args()


def main():
    settings = get_settings()
    setup_logging(settings)
    args = parse_args()

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    db = build_session_factory(engine)()
    try:
        if args.reset:
            db.execute(delete(Product))
            db.commit()

        has_product = db.execute(select(Product.id).limit(1)).first()
        if has_product:
            print("Seed skipped: products already exist.")
            return

        for fields in SAMPLE_PRODUCTS:
            create_product(db, fields)
        logger.info("Seeded %s products", len(SAMPLE_PRODUCTS))
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
