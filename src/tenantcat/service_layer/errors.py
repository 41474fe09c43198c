"""Service-layer error definitions."""

from tenantcat.domain.errors import CatalogError


class CatalogBootstrapError(CatalogError):
    """Raised when the catalog database is missing or unreachable at open time.

    This is a deployment precondition failure and is never retried.

    Attributes:
        url (str): The catalog URL, with credentials redacted.
        reason (str): What went wrong.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Cannot open catalog at {url}: {reason}")
        self.url = url
        self.reason = reason


class StoreUnavailable(CatalogError):
    """Raised when a catalog operation keeps failing after every retry.

    The last underlying error is chained as ``__cause__``.

    Attributes:
        operation (str): Name of the catalog operation that failed.
        attempts (int): How many attempts were made.
    """

    def __init__(self, operation: str, attempts: int) -> None:
        super().__init__(
            f"Catalog store unavailable: '{operation}' failed after {attempts} attempts."
        )
        self.operation = operation
        self.attempts = attempts
