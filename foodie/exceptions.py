"""
Domain Exceptions

Raised by the storefront's domain logic (QR payloads, camera, cart and
checkout) and translated into HTTP error responses in foodie.main.

Outbound service calls do not raise for expected failures; they return
result objects instead (see services/*/base.py).
"""


class FoodieError(Exception):
    """Base class for all storefront domain errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "invalid_request"):
        super().__init__(message)
        self.message = message
        self.code = code


class QRPayloadError(FoodieError):
    """A scanned QR payload is malformed or misses required fields."""

    def __init__(self, message: str, code: str = "invalid_qr"):
        super().__init__(message, code)


class CameraUnavailableError(FoodieError):
    """The camera could not be opened (missing device or permission denied)."""

    status_code = 503

    def __init__(self, message: str = "Could not access camera. Please check permissions."):
        super().__init__(message, "camera_unavailable")


class CartError(FoodieError):
    """Unknown menu item or empty cart where items are required."""

    def __init__(self, message: str, code: str = "cart_error", status_code: int = 400):
        super().__init__(message, code)
        self.status_code = status_code


class CheckoutError(FoodieError):
    """Illegal checkout stage transition or invalid checkout input."""

    def __init__(self, message: str, code: str = "checkout_error"):
        super().__init__(message, code)
