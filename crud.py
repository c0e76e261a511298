import random
import uuid
from sqlalchemy import func
from sqlalchemy.orm import Session
import models
from schemas import UserSchema


def create_user(db: Session, user_schema: UserSchema, password_hash: str, role: str = "client"):
    db_user = models.User(email=user_schema.email.lower(), first_name=user_schema.first_name,
                          last_name=user_schema.last_name, password_hash=password_hash, role=role)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user_by_email(db: Session, email: str):
    return db.query(models.User).filter(func.lower(models.User.email) == email.lower()).first()


def generate_account_number(db: Session) -> int:
    while True:
        account_number = random.randint(1_000_000_000, 9_999_999_999)
        if not db.query(models.Account).filter_by(account_number=account_number).first():
            return account_number


def create_account(db: Session, owner_email: str, account_type: str):
    account = models.Account(account_number=generate_account_number(db), owner_email=owner_email,
                             type=account_type, status="active", balance=0)
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def get_accounts(db: Session):
    return db.query(models.Account).order_by(models.Account.created_on).all()


def get_accounts_by_owner(db: Session, owner_email: str):
    return (
        db.query(models.Account)
        .filter(func.lower(models.Account.owner_email) == owner_email.lower())
        .order_by(models.Account.created_on)
        .all()
    )


def get_transactions_by_account(db: Session, account_number: int):
    return (
        db.query(models.Transaction)
        .filter(models.Transaction.account_number == account_number)
        .order_by(models.Transaction.created_on.desc())
        .all()
    )


def get_transaction(db: Session, transaction_id: uuid.UUID):
    return db.get(models.Transaction, transaction_id)
