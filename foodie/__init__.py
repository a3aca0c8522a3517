"""
                Foodie Storefront

QR-driven restaurant ordering storefront with an admin menu panel.
Menu data is served by the external FoodieOS backend; this service
resolves table QR codes, prices carts, walks the diner through checkout
and keeps the admin's local menu in sync with FoodieOS.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
