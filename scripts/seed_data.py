import argparse

from sqlalchemy import delete

from shelfkeeper.core.demo_data import DEMO_PRODUCTS, demo_batches
from shelfkeeper.core.logging import setup_logging
from shelfkeeper.database import Base, SessionLocal, engine
from shelfkeeper.models import Batch, Product, StoreProfile, import_all_models
from shelfkeeper.services.store_gateway import SqlPersistenceGateway


def parse_args():
    parser = argparse.ArgumentParser(description="Seed demo products and batches for one user.")
    parser.add_argument("--user", required=True, help="User id (JWT subject) to seed data for.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear the user's existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    if args.reset:
        db = SessionLocal()
        try:
            for model in (Batch, Product, StoreProfile):
                db.execute(delete(model).where(model.user_id == args.user))
            db.commit()
        finally:
            db.close()

    gateway = SqlPersistenceGateway(SessionLocal, args.user)
    if gateway.get_batches():
        print("Seed skipped: user {} already has batches.".format(args.user))
        return

    for product in DEMO_PRODUCTS:
        gateway.save_product(product)
    batches = demo_batches()
    for batch in batches:
        gateway.add_batch(batch)
    print("Seeded {} products and {} batches for {}.".format(len(DEMO_PRODUCTS), len(batches), args.user))


if __name__ == "__main__":
    main()
