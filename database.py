from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import logging

import config

logger = logging.getLogger("banka.database")

connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(config.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()

# demo users: (email, first name, last name, password, role)
SEED_USERS = [
    ("kyloren@vader.com", "Kylo", "Ren", "password123", "staff"),
    ("obiwan@therebellion.com", "Obi-Wan", "Kenobi", "password123", "staff"),
    ("thor@avengers.com", "Thor", "Odinson", "password1", "client"),
    ("olegunnar@manutd.com", "Ole Gunnar", "Solskjaer", "password1", "client"),
]

# demo accounts: (account number, owner, type, status, balance)
SEED_ACCOUNTS = [
    (8897654324, "thor@avengers.com", "savings", "active", Decimal("1500000.00")),
    (2869502843, "thor@avengers.com", "current", "inactive", Decimal("0.00")),
    (5473619287, "olegunnar@manutd.com", "current", "active", Decimal("250000.50")),
]


def seed_db(db):
    import models, security
    for email, first_name, last_name, password, role in SEED_USERS:
        if not db.query(models.User).filter_by(email=email).first():
            db.add(models.User(
                email=email,
                first_name=first_name,
                last_name=last_name,
                password_hash=security.hash_password(password),
                role=role
            ))
    db.commit()
    for account_number, owner_email, account_type, status, balance in SEED_ACCOUNTS:
        if not db.query(models.Account).filter_by(account_number=account_number).first():
            db.add(models.Account(
                account_number=account_number,
                owner_email=owner_email,
                type=account_type,
                status=status,
                balance=balance
            ))
    db.commit()


# creates tables, if they do not exist
# also adds the demo staff and client users unless SEED_DB is off
def init_db():
    import models
    Base.metadata.create_all(bind=engine)
    if not config.SEED_DB:
        return
    db = SessionLocal()
    try:
        seed_db(db)
        logger.info("Database seeded", extra={"action": "seed_db"})
    finally:
        db.close()
