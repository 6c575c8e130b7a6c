"""Error taxonomy for the inventory service.

Every error carries the HTTP status it maps to and a message that is safe to
return to clients. Store failures keep the underlying exception chained for
server-side logging only.
"""

class InventoryError(Exception):
    """Base class for errors rendered as a JSON envelope"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(InventoryError):
    """Missing or non-positive required fields"""
    status_code = 400

class NotFoundError(InventoryError):
    """No row returned or affected for a keyed lookup or mutation"""
    status_code = 404

class StoreError(InventoryError):
    """Any failure inside the data layer, including a rolled back transaction"""
    status_code = 500
