"""
                        Services Module

Business logic of the storefront. Services that talk to the outside world
follow the hybrid pattern: a Mock implementation for development and a
real one for staging/production, chosen by a cached factory.

Services:
    - foodieos: FoodieOS menu backend client (fetch + sync)
    - geo: Reverse geocoding (Google Maps / Nominatim)
    - media: Menu image hosting (Cloudinary)
    - payment: UPI deep links and pay-later confirmation
    - qr: QR decoding (OpenCV), payload parsing and resolution
    - menu: Admin menu store (in-memory / SQL)
    - cart, checkout, sessions: Diner-side cart and checkout state
"""
