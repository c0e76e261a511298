"""API tests for the credit and debit routes."""

import pytest

from conftest import API_PREFIX, ACCOUNT_NUMBER, OTHER_CLIENT, signin

MISSING_ACCOUNT = 7897654324


def post_transaction(client, token, direction, body, account_number=ACCOUNT_NUMBER):
    return client.post(
        f"{API_PREFIX}/transactions/{account_number}/{direction}",
        json=body,
        headers={"Authorization": token},
    )


def assert_error(r, status, error=None):
    assert r.status_code == status
    body = r.json()
    assert body["status"] == status
    assert "error" in body
    if error is not None:
        assert body["error"] == error


def test_cashier_credits_account(client, staff_token):
    r = post_transaction(client, staff_token, "credit", {"creditAmount": 500900.05})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == 200
    assert body["message"] == "Account credited successfully"
    assert body["data"]["transactionId"]
    assert body["data"]["transactionType"] == "credit"
    assert body["data"]["amount"] == 500900.05
    assert body["data"]["oldBalance"] == 1500000.00
    assert body["data"]["accountBalance"] == 2000900.05


def test_credit_is_visible_on_account(client, staff_token):
    post_transaction(client, staff_token, "credit", {"creditAmount": "100"})
    r = client.get(f"{API_PREFIX}/accounts/{ACCOUNT_NUMBER}", headers={"Authorization": staff_token})
    assert r.json()["data"]["balance"] == 1500100.00


def test_bearer_prefix_is_accepted(client, staff_token):
    r = post_transaction(client, f"Bearer {staff_token}", "credit", {"creditAmount": 10})
    assert r.status_code == 200


def test_cashier_debits_account(client, staff_token):
    r = post_transaction(client, staff_token, "debit", {"debitAmount": 90900.05})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Account debited successfully"
    assert body["data"]["transactionType"] == "debit"
    assert body["data"]["accountBalance"] == 1409099.95


@pytest.mark.parametrize("direction,body", [
    ("credit", {"creditAmount": 500900.05}),
    ("credit", {"creditAmount": "5sggy0d"}),
    ("credit", {"creditAmount": ""}),
    ("debit", {"debitAmount": 500900.05}),
    ("debit", {"debitAmount": -1}),
    ("debit", {}),
])
def test_customer_cannot_transact(client, client_token, direction, body):
    r = post_transaction(client, client_token, direction, body)
    assert_error(r, 401, "You are not authorized to carry out that action")


@pytest.mark.parametrize("direction", ["credit", "debit"])
def test_missing_account(client, staff_token, direction):
    r = post_transaction(client, staff_token, direction, {f"{direction}Amount": 500900.05},
                         account_number=MISSING_ACCOUNT)
    assert_error(r, 404, "Account does not exist")


@pytest.mark.parametrize("direction", ["credit", "debit"])
def test_negative_amount(client, staff_token, direction):
    r = post_transaction(client, staff_token, direction, {f"{direction}Amount": -500900.05})
    assert_error(r, 400, f"{direction.capitalize()} transaction cannot be less than 1 Naira")


@pytest.mark.parametrize("direction", ["credit", "debit"])
def test_invalid_amount(client, staff_token, direction):
    r = post_transaction(client, staff_token, direction, {f"{direction}Amount": "5sggy0d"})
    assert_error(r, 400, "Transactions can only contain digits")


@pytest.mark.parametrize("direction", ["credit", "debit"])
def test_empty_amount(client, staff_token, direction):
    r = post_transaction(client, staff_token, direction, {f"{direction}Amount": ""})
    assert_error(r, 400, "Transaction amount cannot be empty")


def test_amount_under_the_wrong_key_is_empty(client, staff_token):
    r = post_transaction(client, staff_token, "debit", {"creditAmount": 100})
    assert_error(r, 400, "Transaction amount cannot be empty")


def test_debit_more_than_balance(client, staff_token):
    r = post_transaction(client, staff_token, "debit", {"debitAmount": 2000000000.99})
    assert_error(r, 400)
    assert "Insufficient funds" in r.json()["error"]

    account = client.get(f"{API_PREFIX}/accounts/{ACCOUNT_NUMBER}", headers={"Authorization": staff_token})
    assert account.json()["data"]["balance"] == 1500000.00


def test_missing_token(client):
    r = client.post(f"{API_PREFIX}/transactions/{ACCOUNT_NUMBER}/credit", json={"creditAmount": 10})
    assert_error(r, 401, "Authentication token is missing")


def test_garbage_token(client):
    r = post_transaction(client, "not.a.token", "credit", {"creditAmount": 10})
    assert_error(r, 401, "Invalid or expired authentication token")


def test_account_number_must_be_numeric(client, staff_token):
    r = post_transaction(client, staff_token, "credit", {"creditAmount": 10}, account_number="abc")
    assert_error(r, 400)


def test_transaction_history_and_lookup(client, staff_token, client_token):
    credit = post_transaction(client, staff_token, "credit", {"creditAmount": 200}).json()["data"]
    debit = post_transaction(client, staff_token, "debit", {"debitAmount": 50}).json()["data"]

    r = client.get(f"{API_PREFIX}/accounts/{ACCOUNT_NUMBER}/transactions",
                   headers={"Authorization": client_token})
    assert r.status_code == 200
    ids = {t["transactionId"] for t in r.json()["data"]}
    assert ids == {credit["transactionId"], debit["transactionId"]}

    r = client.get(f"{API_PREFIX}/transactions/{debit['transactionId']}",
                   headers={"Authorization": client_token})
    assert r.status_code == 200
    assert r.json()["data"]["transactionType"] == "debit"
    assert r.json()["data"]["amount"] == 50.0


def test_transaction_lookup_missing(client, staff_token):
    r = client.get(f"{API_PREFIX}/transactions/00000000-0000-0000-0000-000000000000",
                   headers={"Authorization": staff_token})
    assert_error(r, 404, "Transaction does not exist")


def test_other_client_cannot_see_transaction(client, staff_token):
    other_token = signin(client, OTHER_CLIENT)
    credit = post_transaction(client, staff_token, "credit", {"creditAmount": 200}).json()["data"]

    r = client.get(f"{API_PREFIX}/transactions/{credit['transactionId']}",
                   headers={"Authorization": other_token})
    assert_error(r, 403)


@pytest.mark.parametrize("direction", ["credit", "debit"])
def test_amount_with_too_many_digits(client, staff_token, direction):
    r = post_transaction(client, staff_token, direction, {f"{direction}Amount": "1" * 30})
    assert_error(r, 400, "Transactions can only contain digits")


def test_amount_above_column_limit(client, staff_token):
    r = post_transaction(client, staff_token, "credit", {"creditAmount": "12345678901234567890.55"})
    assert_error(r, 400, "Credit transaction cannot be more than 9,999,999,999,999.99 Naira")

    account = client.get(f"{API_PREFIX}/accounts/{ACCOUNT_NUMBER}", headers={"Authorization": staff_token})
    assert account.json()["data"]["balance"] == 1500000.00


def test_credit_past_balance_limit(client, staff_token):
    r = post_transaction(client, staff_token, "credit", {"creditAmount": "9999999999999.99"})
    assert_error(r, 400, "Account balance cannot exceed 9,999,999,999,999.99 Naira")

    account = client.get(f"{API_PREFIX}/accounts/{ACCOUNT_NUMBER}", headers={"Authorization": staff_token})
    assert account.json()["data"]["balance"] == 1500000.00


@pytest.mark.parametrize("direction", ["credit", "debit"])
def test_account_number_beyond_bigint(client, staff_token, direction):
    r = post_transaction(client, staff_token, direction, {f"{direction}Amount": 10},
                         account_number=99999999999999999999)
    assert_error(r, 404, "Account does not exist")


def test_transaction_timestamp_is_utc(client, staff_token):
    r = post_transaction(client, staff_token, "credit", {"creditAmount": 10})
    assert r.json()["data"]["createdOn"].endswith("+00:00")
