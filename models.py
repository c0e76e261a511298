from sqlalchemy import Column, String, ForeignKey, Numeric, BigInteger, DateTime, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from database import Base
import datetime
import uuid


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="client")  # "client" or "staff"
    created_on = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("role IN ('client', 'staff')", name="check_role"),
    )

    accounts = relationship("Account", back_populates="owner")


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    account_number = Column(BigInteger, unique=True, nullable=False, index=True)
    owner_email = Column(String, ForeignKey("users.email"), nullable=False)
    type = Column(String, nullable=False, default="savings")
    status = Column(String, nullable=False, default="active")
    balance = Column(Numeric(15, 2), nullable=False, default=0)
    created_on = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("type IN ('savings', 'current')", name="check_account_type"),
        CheckConstraint("status IN ('active', 'inactive')", name="check_account_status"),
        CheckConstraint("balance >= 0", name="check_balance_non_negative"),
    )

    owner = relationship("User", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    account_number = Column(BigInteger, ForeignKey("accounts.account_number"), nullable=False)
    cashier_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    type = Column(String, nullable=False)  # "credit" or "debit"
    amount = Column(Numeric(15, 2), nullable=False)
    old_balance = Column(Numeric(15, 2), nullable=False)
    new_balance = Column(Numeric(15, 2), nullable=False)
    created_on = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("type IN ('credit', 'debit')", name="check_transaction_type"),
    )

    account = relationship("Account", back_populates="transactions")
