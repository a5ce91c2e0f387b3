class ShopifyClientError(Exception):
    """Base exception for all order source errors."""


class ShopifyRateLimitError(ShopifyClientError):
    """Raised when API returns 429 Too Many Requests."""


class ShopifyValidationError(ShopifyClientError):
    """Raised when the API response format is invalid or malformed."""


class ShopifyHTTPError(ShopifyClientError):
    """Raised for unexpected non-2xx HTTP responses."""
