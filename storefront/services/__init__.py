# Services Module
from .api import StorefrontAPI
from .models import Product, Stock
from .notifications import NotificationService

__all__ = ["StorefrontAPI", "Product", "Stock", "NotificationService"]
