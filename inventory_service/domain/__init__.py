"""
Domain package for the Inventory Service.

Exports the product models shared by the gateway and the HTTP layer.
Keep this package focused on data definitions and validation concerns.
"""

from inventory_service.domain.models import Product, ProductIn

__all__ = [
    "Product",
    "ProductIn",
]
