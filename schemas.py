import datetime
from typing import Any, Literal
from pydantic import BaseModel, EmailStr, Field


class UserSchema(BaseModel):
    first_name: str = Field(min_length=1, max_length=50, alias="firstName")
    last_name: str = Field(min_length=1, max_length=50, alias="lastName")
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)


class SigninSchema(BaseModel):
    email: str
    password: str


class AccountSchema(BaseModel):
    type: Literal["savings", "current"] = "savings"


# amounts are validated by transactions.parse_amount, which knows the error messages
class CreditSchema(BaseModel):
    creditAmount: Any = None


class DebitSchema(BaseModel):
    debitAmount: Any = None


def money(value) -> float:
    return float(round(value, 2))


# SQLite hands back naive datetimes, they are stored as UTC
def timestamp(value) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc).isoformat()


def user_data(user, token: str) -> dict:
    return {
        "token": token,
        "id": str(user.id),
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "role": user.role
    }


def account_data(account) -> dict:
    return {
        "id": str(account.id),
        "accountNumber": account.account_number,
        "ownerEmail": account.owner_email,
        "type": account.type,
        "status": account.status,
        "balance": money(account.balance),
        "createdOn": timestamp(account.created_on)
    }


def transaction_data(transaction) -> dict:
    return {
        "transactionId": str(transaction.id),
        "accountNumber": transaction.account_number,
        "amount": money(transaction.amount),
        "cashier": str(transaction.cashier_id),
        "transactionType": transaction.type,
        "oldBalance": money(transaction.old_balance),
        "accountBalance": money(transaction.new_balance),
        "createdOn": timestamp(transaction.created_on)
    }
