# storefront/data/seed.py
from storefront.data.database import SessionLocal
from storefront.data.models import CategoryModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORIES = [
    ("T-Shirts", "Comfortable t-shirts in various colors and styles"),
    ("Shirts", "Formal and casual shirts for all occasions"),
    ("Jeans", "Denim jeans in different fits and styles"),
]


def seed_categories(db=None) -> int:
    """Insert the default categories when the table is empty. Returns rows added."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(CategoryModel).first():
            return 0
        for name, description in DEFAULT_CATEGORIES:
            db.add(CategoryModel(name=name, description=description, created_by="system"))
        db.commit()
        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
        return len(DEFAULT_CATEGORIES)
    finally:
        if own_session:
            db.close()
