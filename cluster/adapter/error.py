"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    code: str = "ADAPTER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code:
            self.code = code


class DeliveryError(AdapterError):
    """Outbound email could not be delivered."""

    code = "EMAIL_DELIVERY_FAILED"


class WebhookVerificationError(AdapterError):
    """Inbound webhook failed signature or freshness checks."""

    code = "INVALID_WEBHOOK_SIGNATURE"
