"""Notification pipeline exceptions."""


class NotificationError(Exception):
    """Base exception for notification pipeline errors."""


class TransportError(NotificationError):
    """Raised by a channel transport that cannot attempt a delivery at all.

    Transports normally report failures as an OperationResult; the delivery
    executor isolates this exception per target like any other failure.

    Attributes:
        channel: Channel type value of the transport
        target: Target the delivery was aimed at
    """

    def __init__(self, message: str, channel: str = "", target: str = ""):
        super().__init__(message)
        self.channel = channel
        self.target = target
