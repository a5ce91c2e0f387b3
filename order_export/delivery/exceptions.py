class DeliveryError(Exception):
    """Raised when the export file cannot be transferred to the remote server."""
