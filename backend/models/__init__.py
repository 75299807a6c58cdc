# backend/models/__init__.py
from .user_model import User
from .client_model import ClientProfile
from .supplier_model import SupplierProfile
from .courier_model import CourierProfile
from .admin_model import AdminProfile
from .address_model import Address
from .category_model import Category
from .product_model import Product
from .favorite_model import Favorite
from .order_model import Order, OrderStatusHistory
from .order_item_model import OrderItem
from .payment_model import Payment
from .notification_model import Notification
from .session_model import UserSession
from .audit_model import AuditLog
from .review_model import Review
