import database, crud, schemas, models, security, transactions, config
from errors import BankaError, Conflict, NotFound, Forbidden
from logging_config import setup_logging
from permissions import Capability, CurrentUser, require, check_can_list_accounts, is_owner_or_staff, validate_email
from fastapi import FastAPI, APIRouter, Depends, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.orm import Session
from typing import Optional
import uuid

logger = setup_logging(config.LOG_LEVEL)


def get_db():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(authorization: Optional[str] = Header(None),
                     db: Session = Depends(get_db)) -> CurrentUser:
    if not authorization or not authorization.strip():
        raise HTTPException(status_code=401, detail="Authentication token is missing")
    try:
        payload = security.decode_token(security.extract_token(authorization))
    except security.TokenError:
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")
    user = crud.get_user_by_email(db, payload.get("sub") or "")
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")
    return CurrentUser(id=user.id, email=user.email, role=user.role)


def envelope(status: int, data, message: str = None) -> dict:
    body = {"status": status, "data": data}
    if message:
        body["message"] = message
    return body


def error_response(status: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"status": status, "error": error})


app = FastAPI(title="Banka API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BankaError)
def banka_error_handler(request: Request, exc: BankaError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return error_response(400, message)


@app.on_event("startup")
def startup_event():
    database.init_db()


@app.get("/")
def read_root():
    return {"status": 200, "message": "Banka API running", "docs": "/docs"}


router = APIRouter(prefix=config.API_PREFIX)


@router.post("/auth/signup", status_code=201)
def signup(payload: schemas.UserSchema, db: Session = Depends(get_db)):
    if crud.get_user_by_email(db, payload.email):
        raise Conflict("Email already in use")
    user = crud.create_user(db, payload, security.hash_password(payload.password))
    logger.info("User signed up", extra={"user_id": str(user.id), "action": "signup"})
    token = security.create_token(user.email, user.role)
    return envelope(201, [schemas.user_data(user, token)])


@router.post("/auth/signin")
def signin(payload: schemas.SigninSchema, db: Session = Depends(get_db)):
    user = crud.get_user_by_email(db, payload.email)
    if not user or not security.check_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    logger.info("User signed in", extra={"user_id": str(user.id), "action": "signin"})
    token = security.create_token(user.email, user.role)
    return envelope(200, [schemas.user_data(user, token)])


@router.post("/accounts", status_code=201)
def create_account(payload: schemas.AccountSchema,
                   current_user: CurrentUser = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    account = crud.create_account(db, current_user.email, payload.type)
    logger.info("Bank account created", extra={
        "user_id": str(current_user.id), "action": "create_account", "resource": str(account.account_number)
    })
    return envelope(201, schemas.account_data(account), "Account created successfully")


@router.get("/accounts")
def get_accounts(current_user: CurrentUser = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    if current_user.can(Capability.LIST_ANY_USER_ACCOUNTS):
        accounts = crud.get_accounts(db)
    else:
        accounts = crud.get_accounts_by_owner(db, current_user.email)
    return envelope(200, [schemas.account_data(account) for account in accounts])


def get_visible_account(db: Session, account_number: int, current_user: CurrentUser) -> models.Account:
    account = transactions.get_account(db, account_number)
    if not is_owner_or_staff(current_user, account.owner_email):
        raise Forbidden()
    return account


@router.get("/accounts/{account_number}")
def get_account(account_number: int,
                current_user: CurrentUser = Depends(get_current_user),
                db: Session = Depends(get_db)):
    account = get_visible_account(db, account_number, current_user)
    return envelope(200, schemas.account_data(account))


@router.get("/accounts/{account_number}/transactions")
def get_account_transactions(account_number: int,
                             current_user: CurrentUser = Depends(get_current_user),
                             db: Session = Depends(get_db)):
    account = get_visible_account(db, account_number, current_user)
    history = crud.get_transactions_by_account(db, account.account_number)
    return envelope(200, [schemas.transaction_data(t) for t in history])


@router.get("/transactions/{transaction_id}")
def get_transaction(transaction_id: uuid.UUID,
                    current_user: CurrentUser = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    transaction = crud.get_transaction(db, transaction_id)
    if not transaction:
        raise NotFound("Transaction does not exist")
    if not is_owner_or_staff(current_user, transaction.account.owner_email):
        raise Forbidden()
    return envelope(200, schemas.transaction_data(transaction))


@router.post("/transactions/{account_number}/credit")
def credit_account(account_number: int,
                   payload: Optional[schemas.CreditSchema] = None,
                   current_user: CurrentUser = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    require(current_user, Capability.CREDIT)
    raw_amount = payload.creditAmount if payload else None
    transaction = transactions.apply_transaction(db, account_number, raw_amount,
                                                 transactions.CREDIT, current_user)
    return envelope(200, schemas.transaction_data(transaction), "Account credited successfully")


@router.post("/transactions/{account_number}/debit")
def debit_account(account_number: int,
                  payload: Optional[schemas.DebitSchema] = None,
                  current_user: CurrentUser = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    require(current_user, Capability.DEBIT)
    raw_amount = payload.debitAmount if payload else None
    transaction = transactions.apply_transaction(db, account_number, raw_amount,
                                                 transactions.DEBIT, current_user)
    return envelope(200, schemas.transaction_data(transaction), "Account debited successfully")


@router.get("/user/{email}/accounts")
def get_user_accounts(email: str,
                      current_user: CurrentUser = Depends(get_current_user),
                      db: Session = Depends(get_db)):
    email = validate_email(email)
    check_can_list_accounts(current_user, email)
    user = crud.get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    accounts = crud.get_accounts_by_owner(db, user.email)
    return envelope(200, [schemas.account_data(account) for account in accounts])


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
