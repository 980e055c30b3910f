# inventory/errors.py
# Failures raised by a product service. The store records their message;
# the REST surface maps status_code onto the response.


class ProductServiceError(Exception):
    status_code = 500


class ProductValidationError(ProductServiceError):
    """Request payload failed a precondition (e.g. empty name)."""
    status_code = 400


class ProductNotFoundError(ProductServiceError):
    status_code = 404


class NetworkError(ProductServiceError):
    """Transient failure on read."""
    status_code = 503


class ServerError(ProductServiceError):
    """Transient failure on write."""
    status_code = 500
