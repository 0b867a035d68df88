# scripts/seed.py

from datetime import date
import logging

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite

from dashboard.auth.providers import hash_password
from dashboard.db.engine import get_engine
from dashboard.db.schema import invoices, metadata, users

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

DEMO_USER = {
    "id": "410544b2-4001-4271-9855-fec4b6a6442a",
    "name": "User",
    "email": "user@nextmail.com",
    "password": "123456",
}

# (customer_id, amount in cents, status, date)
DEMO_INVOICES = [
    ("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa", 15795, "pending", date(2022, 12, 6)),
    ("3958dc9e-712f-4377-85e9-fec4b6a6442a", 20348, "pending", date(2022, 11, 14)),
    ("3958dc9e-742f-4377-85e9-fec4b6a6442a", 3040, "paid", date(2022, 10, 29)),
    ("76d65c26-f784-44a2-ac19-586678f7c2f2", 44800, "paid", date(2023, 9, 10)),
    ("13d07535-c59e-4157-a011-f8d2ef4e0cbb", 34577, "pending", date(2023, 8, 5)),
    ("cc27c14a-0acf-4f4a-a6c9-d45682c144b9", 54246, "pending", date(2023, 7, 16)),
    ("6e90c1b4-2e0c-4a5a-bb16-a6b3c4d7e0d2", 666, "pending", date(2023, 6, 27)),
]


def insert_user_if_missing(conn, user: dict) -> None:
    """
    Insert the user unless one with the same email exists (idempotent seed).
    """
    row = {**user, "password": hash_password(user["password"])}
    dialect = conn.dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(users).values(**row).on_conflict_do_nothing(
            index_elements=[users.c.email]
        )
    elif dialect == "sqlite":
        stmt = sqlite.insert(users).values(**row).on_conflict_do_nothing(
            index_elements=[users.c.email]
        )
    else:
        exists = conn.execute(
            select(users.c.id).where(users.c.email == user["email"])
        ).first()
        if exists:
            return
        stmt = users.insert().values(**row)
    conn.execute(stmt)


def seed(engine) -> dict:
    metadata.create_all(engine)

    with engine.begin() as conn:
        insert_user_if_missing(conn, DEMO_USER)

        # Invoices only go in on an empty table
        n_existing = conn.execute(select(func.count()).select_from(invoices)).scalar_one()
        if n_existing == 0:
            conn.execute(
                invoices.insert(),
                [
                    {"customer_id": c, "amount": a, "status": s, "date": d}
                    for c, a, s, d in DEMO_INVOICES
                ],
            )

    return {
        "n_users": 1,
        "n_invoices_seeded": 0 if n_existing else len(DEMO_INVOICES),
        "n_invoices_existing": n_existing,
    }


def main():
    stats = seed(get_engine())

    logger.info(f"Demo user:             {DEMO_USER['email']}")
    logger.info(f"Invoices seeded:       {stats['n_invoices_seeded']}")
    if stats["n_invoices_existing"]:
        logger.warning(
            "Invoices table already had %s row(s); skipped invoice seed",
            stats["n_invoices_existing"],
        )


if __name__ == "__main__":
    main()
