from enum import Enum


class ErrorType(Enum):
    INVALID_INPUT = "invalid_input"
    REFERENCE_NOT_FOUND = "reference_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.INVALID_INPUT: 422,
    ErrorType.REFERENCE_NOT_FOUND: 404,
    ErrorType.INSUFFICIENT_STOCK: 409,
    ErrorType.NOT_FOUND: 404,
    ErrorType.STORE_FAILURE: 500,
    ErrorType.INTERNAL_ERROR: 500,
}
