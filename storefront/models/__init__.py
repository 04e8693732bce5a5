from storefront.models.products import Product, ProductImage
from storefront.models.inquiries import Inquiry
from storefront.models.sales import Sale
from storefront.models.reviews import Review, ReviewImage
from storefront.models.seller import SellerProfile
from storefront.models.users import AdminUser

__all__ = [
    "Product",
    "ProductImage",
    "Inquiry",
    "Sale",
    "Review",
    "ReviewImage",
    "SellerProfile",
    "AdminUser",
]
