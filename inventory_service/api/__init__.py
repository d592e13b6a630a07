"""
HTTP package for the Inventory Service.

Exposes the application factory; routes, dependencies and error mapping live
in the sibling modules.
"""

from inventory_service.api.app import create_app

__all__ = ["create_app"]
