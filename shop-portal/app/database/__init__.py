# Database modules

from .products import product_db, ProductDatabase
from .carts import cart_db, CartDatabase, StockExceededError
from .enrollments import enrollment_db, EnrollmentDatabase

__all__ = [
    "product_db",
    "ProductDatabase",
    "cart_db",
    "CartDatabase",
    "StockExceededError",
    "enrollment_db",
    "EnrollmentDatabase",
]
