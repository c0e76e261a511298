import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from sqlalchemy.orm import Session

import models
from errors import (
    EmptyAmount, InvalidFormat, BelowMinimum, AboveMaximum, BalanceLimitExceeded,
    InsufficientFunds, NotFound
)
from permissions import CurrentUser

logger = logging.getLogger("banka.transactions")

CREDIT = "credit"
DEBIT = "debit"
DIRECTIONS = (CREDIT, DEBIT)

MINIMUM_AMOUNT = Decimal("1")
MINOR_UNIT = Decimal("0.01")
# largest value a Numeric(15, 2) column holds
MAXIMUM_AMOUNT = Decimal("9999999999999.99")
MAXIMUM_BALANCE = MAXIMUM_AMOUNT
# BIGINT range of accounts.account_number
MAXIMUM_ACCOUNT_NUMBER = 2 ** 63 - 1

_AMOUNT_RE = re.compile(r"^-?\d+(\.\d+)?$")


def parse_amount(raw, direction: str) -> Decimal:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise EmptyAmount()
    # bool is an int subclass, reject it explicitly
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float, Decimal)):
        raise InvalidFormat()
    text = raw.strip() if isinstance(raw, str) else str(raw)
    if not _AMOUNT_RE.match(text):
        raise InvalidFormat()
    amount = Decimal(text)
    if amount < MINIMUM_AMOUNT:
        raise BelowMinimum(direction)
    try:
        amount = amount.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can carry
        raise InvalidFormat()
    if amount > MAXIMUM_AMOUNT:
        raise AboveMaximum(direction, MAXIMUM_AMOUNT)
    return amount


def get_account(db: Session, account_number, for_update: bool = False) -> models.Account:
    if not 0 < account_number <= MAXIMUM_ACCOUNT_NUMBER:
        raise NotFound("Account does not exist")
    query = db.query(models.Account).filter(models.Account.account_number == account_number)
    if for_update:
        query = query.with_for_update()
    account = query.first()
    if not account:
        raise NotFound("Account does not exist")
    return account


def apply_transaction(db: Session, account_number: int, raw_amount, direction: str,
                      cashier: CurrentUser) -> models.Transaction:
    if direction not in DIRECTIONS:
        raise ValueError(f"unknown transaction direction: {direction}")
    amount = parse_amount(raw_amount, direction)
    account = get_account(db, account_number, for_update=True)

    old_balance = Decimal(account.balance)
    if direction == DEBIT:
        if amount > old_balance:
            raise InsufficientFunds(old_balance)
        new_balance = old_balance - amount
    else:
        new_balance = old_balance + amount
        if new_balance > MAXIMUM_BALANCE:
            raise BalanceLimitExceeded(MAXIMUM_BALANCE)

    account.balance = new_balance
    transaction = models.Transaction(
        account_number=account.account_number,
        cashier_id=cashier.id,
        type=direction,
        amount=amount,
        old_balance=old_balance,
        new_balance=new_balance
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info(f"Account {direction}ed", extra={
        "user_id": str(cashier.id), "action": direction, "resource": str(account.account_number)
    })
    return transaction
