from typing import Optional


class ClusterLensError(Exception):
    """Base exception for clusterlens."""

    pass


class FetchError(ClusterLensError):
    """Raised when a required resource kind cannot be listed from the cluster API."""

    def __init__(self, kind: str, message: str, status: Optional[int] = None):
        self.kind = kind
        self.status = status
        super().__init__(f"failed to list {kind}: {message}")


class ResourceNotFoundError(FetchError):
    """Raised when the API reports the resource kind does not exist (HTTP 404)."""

    pass


class ClusterAccessError(FetchError):
    """Raised when the API rejects the credentials (HTTP 401/403)."""

    pass


class ClusterConnectionError(FetchError):
    """Raised when the cluster API is unreachable or fails for any other reason."""

    pass


class PricingDataError(ClusterLensError):
    """Raised when a pricing table cannot be read or validated."""

    pass
