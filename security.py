import datetime
import bcrypt, jwt

import config


class TokenError(Exception):
    pass


def hash_password(password: str, rounds: int = None) -> str:
    salt = bcrypt.gensalt(rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_token(email: str, role: str, expires_in: datetime.timedelta = None) -> str:
    expires_in = expires_in or datetime.timedelta(minutes=config.EXP_MIN)
    payload = {
        "sub": email,
        "role": role,
        "exp": datetime.datetime.now(datetime.timezone.utc) + expires_in
    }
    return jwt.encode(payload, config.PRIVATE_JWT_KEY, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, config.PUBLIC_JWT_KEY, algorithms=[config.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise TokenError(str(e)) from e


def extract_token(header_value: str) -> str:
    # accepts the raw token or 'Bearer <token>'
    parts = header_value.strip().split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return header_value.strip()
