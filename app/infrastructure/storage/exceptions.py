"""Key-value store exceptions."""


class StorageError(Exception):
    """Base exception for durable store failures."""


class StorageUnavailableError(StorageError):
    """Raised when the durable store cannot be reached or rejects an operation.

    Attributes:
        operation: Store operation that failed (get, put, delete, increment)
        key: Key involved in the failed operation
    """

    def __init__(self, message: str, operation: str = "", key: str = ""):
        super().__init__(message)
        self.operation = operation
        self.key = key
