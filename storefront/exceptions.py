"""
Storefront exceptions surfaced to UI callers.

Messages are human-readable and safe to show in a transient notification.
"""


class StorefrontError(Exception):
    """Base exception for facade-level errors"""

    def __init__(self, detail: str = "Something went wrong"):
        self.detail = detail
        super().__init__(detail)


class ProductNotFoundError(StorefrontError):
    """Product could not be resolved remotely or in the fallback catalog"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Product not found: {identifier}")


class RecordValidationError(StorefrontError):
    """A remote record failed strict structural validation"""

    def __init__(self, detail: str = "Invalid record", label: str | None = None):
        self.label = label
        super().__init__(detail)


class CartError(StorefrontError):
    """Cart operation rejected by the store or not completed"""

    def __init__(self, detail: str = "Cart update failed"):
        super().__init__(detail)


class AuthenticationError(StorefrontError):
    """Customer login, registration or session lookup failed"""

    def __init__(self, detail: str = "Authentication failed"):
        super().__init__(detail)
