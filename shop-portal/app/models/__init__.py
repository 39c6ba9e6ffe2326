# Shop Portal Models

from .product import Product, Category, ProductListResponse, CategoryListResponse
from .cart import Cart, CartItem, AddToCartRequest, CartResponse
from .enrollment import Course, Enrollment, EnrollmentListResponse
from .upload import UploadResponse, SystemSettings

__all__ = [
    "Product",
    "Category",
    "ProductListResponse",
    "CategoryListResponse",
    "Cart",
    "CartItem",
    "AddToCartRequest",
    "CartResponse",
    "Course",
    "Enrollment",
    "EnrollmentListResponse",
    "UploadResponse",
    "SystemSettings",
]
