# bazaar/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from bazaar.data.database import SessionLocal, init_db
from bazaar.data.models.product import ProductModel
from bazaar.data.models.user import UserModel
from bazaar.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

# (name, name_hi, name_te, category, price, unit)
DEMO_PRODUCTS = [
    ("Onion", "प्याज़", "ఉల్లిపాయ", "vegetables", "32.00", "kg"),
    ("Tomato", "टमाटर", "టమోటా", "vegetables", "28.50", "kg"),
    ("Potato", "आलू", "బంగాళాదుంప", "vegetables", "22.00", "kg"),
    ("Coriander", "धनिया", "కొత్తిమీర", "vegetables", "10.00", "bunch"),
    ("Chilli", "मिर्च", "మిర్చి", "spices", "80.00", "kg"),
    ("Ginger", "अदरक", "అల్లం", "spices", "120.00", "kg"),
]


def seed(db: Session) -> bool:
    # not forcing: only seed if empty
    if db.execute(select(UserModel).limit(1)).first():
        return False

    wholesaler = UserModel(
        username="demo-wholesaler",
        name="Demo Mandi Traders",
        mobile="9000000001",
        address="APMC Yard, Hyderabad",
        role="wholesaler",
        preferred_language="te",
    )
    vendor = UserModel(
        username="demo-vendor",
        name="Demo Street Vendor",
        mobile="9000000002",
        role="vendor",
        preferred_language="hi",
    )
    db.add_all([wholesaler, vendor])
    db.flush()

    db.add_all(
        ProductModel(
            name=name,
            name_hi=name_hi,
            name_te=name_te,
            category=category,
            price=Decimal(price),
            unit=unit,
            wholesaler_id=wholesaler.id,
        )
        for name, name_hi, name_te, category, price, unit in DEMO_PRODUCTS
    )
    db.commit()
    logger.info(f"Seeded wholesaler {wholesaler.id}, vendor {vendor.id}, {len(DEMO_PRODUCTS)} products")
    return True


if __name__ == "__main__":
    configure_logging()
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
