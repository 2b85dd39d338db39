class OrderError(Exception):
    """Base class for failures that end an order request."""
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(OrderError):
    """Client sent missing or unusable order fields."""
    status_code = 400
    message = "Missing required fields"


class NotFoundError(OrderError):
    status_code = 404
    message = "Order not found"


class StorageError(OrderError):
    """The orders file could not be written or read."""
    status_code = 500
    message = "Could not access orders"
