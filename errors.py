NOT_AUTHORIZED = "You are not authorized to carry out that action"


class BankaError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BankaError):
    status_code = 400
    default_message = "Invalid input"


class EmptyAmount(ValidationError):
    default_message = "Transaction amount cannot be empty"


class InvalidFormat(ValidationError):
    default_message = "Transactions can only contain digits"


class BelowMinimum(ValidationError):
    def __init__(self, direction):
        super().__init__(f"{direction.capitalize()} transaction cannot be less than 1 Naira")


class InvalidEmail(ValidationError):
    default_message = "Please provide a valid email address"


class InsufficientFunds(BankaError):
    status_code = 400

    def __init__(self, balance):
        super().__init__(f"Insufficient funds. Account balance is {balance:,.2f}")


class Unauthorized(BankaError):
    status_code = 401
    default_message = NOT_AUTHORIZED


class Forbidden(BankaError):
    status_code = 403
    default_message = NOT_AUTHORIZED


class NotFound(BankaError):
    status_code = 404
    default_message = "Not found"


class Conflict(BankaError):
    status_code = 409
    default_message = "Resource already exists"


class AboveMaximum(ValidationError):
    def __init__(self, direction, maximum):
        super().__init__(f"{direction.capitalize()} transaction cannot be more than {maximum:,.2f} Naira")


class BalanceLimitExceeded(ValidationError):
    def __init__(self, maximum):
        super().__init__(f"Account balance cannot exceed {maximum:,.2f} Naira")
