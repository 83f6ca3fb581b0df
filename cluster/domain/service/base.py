"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the business rules; repositories only store and fetch.
    Each public method runs inside its own logfire span.
    """

    pass
