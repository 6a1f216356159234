from .product import Product, Category, ProductDetail
from .order import Order, OrderItem

__all__ = [
	"Product",
	"Category",
	"ProductDetail",
	"Order",
	"OrderItem",
]
