from services.admin import AdminService
from services.auth import AuthService
from services.cart import CartService
from services.category import CategoryService
from services.order import OrderService
from services.product import ProductService
from services.rating import RatingService
from services.testimonial import TestimonialService

__all__ = [
    "AdminService",
    "AuthService",
    "CartService",
    "CategoryService",
    "OrderService",
    "ProductService",
    "RatingService",
    "TestimonialService",
]
