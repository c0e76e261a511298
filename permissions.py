import enum
import logging
import uuid
from dataclasses import dataclass

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from errors import Unauthorized, Forbidden, InvalidEmail

logger = logging.getLogger("banka.permissions")


class Capability(str, enum.Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    LIST_ANY_USER_ACCOUNTS = "list_any_user_accounts"


ROLE_CAPABILITIES = {
    "client": frozenset(),
    "staff": frozenset(Capability),
}


@dataclass(frozen=True)
class CurrentUser:
    id: uuid.UUID
    email: str
    role: str

    def can(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES.get(self.role, frozenset())


def require(identity: CurrentUser, capability: Capability):
    if not identity.can(capability):
        logger.warning("Capability denied", extra={
            "user_id": str(identity.id), "action": capability.value
        })
        raise Unauthorized()


def is_owner_or_staff(identity: CurrentUser, owner_email: str) -> bool:
    return identity.can(Capability.LIST_ANY_USER_ACCOUNTS) or identity.email.lower() == owner_email.lower()


def check_can_list_accounts(identity: CurrentUser, email: str):
    if not is_owner_or_staff(identity, email):
        logger.warning("Account listing denied", extra={
            "user_id": str(identity.id), "action": "list_user_accounts", "resource": email
        })
        raise Forbidden()


_email_adapter = TypeAdapter(EmailStr)


def validate_email(email: str) -> str:
    try:
        return _email_adapter.validate_python(email)
    except PydanticValidationError:
        raise InvalidEmail()
