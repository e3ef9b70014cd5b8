from http import HTTPStatus


class FlexcrowError(Exception):
    """Base class for errors rendered directly to the API caller"""
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'internal error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FlexcrowError):
    """Raised when request input fails validation"""
    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'invalid input'


class DanglingReferenceError(FlexcrowError):
    """Raised when a referenced product, address, payment or user does not exist"""
    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'reference_error'


class AuthorizationError(FlexcrowError):
    """Raised when the caller's role or ownership does not allow the operation"""
    status_code = HTTPStatus.FORBIDDEN
    default_message = 'forbidden'


class NotFoundError(FlexcrowError):
    """Raised when the target record does not exist"""
    status_code = HTTPStatus.NOT_FOUND
    default_message = 'not found'


class InsufficientFundsError(FlexcrowError):
    """Raised when a withdrawal exceeds the user's balance"""
    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'insufficient balance for withdrawal'


class PersistenceError(FlexcrowError):
    """Raised when a database write fails"""
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'database error'
