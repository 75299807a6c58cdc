# backend/database/demo_data.py
"""Demo data for local development."""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from database.session import Base, engine, SessionLocal
from models.category_model import Category
from models.product_model import Product
from models.user_model import User
from schemas.users import RoleSpecificData
from services.auth_service import create_user

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("Restaurant", "Grocery", "Pharmacy", "Bakery", "Drinks")

DEMO_PASSWORD = "demo1234"


def ensure_default_categories(db: Session) -> int:
    """Creates the missing default categories; returns how many were added."""
    existing = {name for (name,) in db.query(Category.name).all()}
    missing = [Category(name=n) for n in DEFAULT_CATEGORIES if n not in existing]
    if missing:
        db.add_all(missing)
        db.commit()
    return len(missing)


def create_demo_data() -> bool:
    """Seeds one user per role plus a small catalog. Returns False if demo data already exists."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_default_categories(db)
        if db.query(User).filter(User.email == "admin@livraxpress.local").first():
            logger.info("Demo data already present")
            return False

        create_user(db, "admin@livraxpress.local", DEMO_PASSWORD, "Platform Admin", None, "admin",
                    RoleSpecificData(access_level="super"))
        client = create_user(db, "client@livraxpress.local", DEMO_PASSWORD, "Sara Client", "0600000001", "client")
        supplier = create_user(
            db, "resto@livraxpress.local", DEMO_PASSWORD, "Karim Supplier", "0600000002", "supplier",
            RoleSpecificData(company_name="Chez Karim", supplier_type="restaurant", delivery_fee=15),
        )
        create_user(
            db, "courier@livraxpress.local", DEMO_PASSWORD, "Youssef Courier", "0600000003", "courier",
            RoleSpecificData(vehicle_type="scooter", license_number="CS-1234"),
        )

        restaurant = db.query(Category).filter(Category.name == "Restaurant").first()
        drinks = db.query(Category).filter(Category.name == "Drinks").first()
        db.add_all([
            Product(supplier_id=supplier.profile_id, category_id=restaurant.id, name="Chicken tagine",
                    description="Slow cooked with lemon and olives", price=Decimal("65.00"), stock=20),
            Product(supplier_id=supplier.profile_id, category_id=restaurant.id, name="Couscous royal",
                    description="Friday special", price=Decimal("80.00"), promo_price=Decimal("70.00"), stock=15),
            Product(supplier_id=supplier.profile_id, category_id=drinks.id, name="Mint tea",
                    description="", price=Decimal("12.00"), stock=100),
        ])
        db.commit()
        logger.info("Demo data created (client profile %s)", client.profile_id)
        return True
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_demo_data()
