# boutique/errors.py
"""
Error taxonomy shared by the store functions and the HTTP layer.

Store and service code raises these; the exception handlers registered in
``boutique.main`` turn them into ``{"error": message}`` responses.
"""


class ShopError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ShopError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(ShopError):
    # duplicate unique keys are reported as a plain 400
    status_code = 400
    default_message = "Resource already exists"


class UnauthorizedError(ShopError):
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(ShopError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ShopError):
    status_code = 404
    default_message = "Not found"


class InternalError(ShopError):
    status_code = 500
