"""
Default admin account and sample catalog
"""
import logging
from decimal import Decimal
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.models.product import Product
from app.repositories.product_repository import ProductRepository
from app.services.account_service import AccountService

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        'name': 'Whey Protein Powder',
        'description': 'High-quality whey protein for muscle building and recovery',
        'price': Decimal('2500.00'),
        'category': 'Protein',
        'stock_quantity': 50,
        'image_url': 'https://via.placeholder.com/300x300?text=Whey+Protein'
    },
    {
        'name': 'Creatine Monohydrate',
        'description': 'Pure creatine monohydrate for strength and power',
        'price': Decimal('1200.00'),
        'category': 'Performance',
        'stock_quantity': 30,
        'image_url': 'https://via.placeholder.com/300x300?text=Creatine'
    },
    {
        'name': 'BCAA Powder',
        'description': 'Branch-chain amino acids for muscle recovery',
        'price': Decimal('1800.00'),
        'category': 'Recovery',
        'stock_quantity': 25,
        'image_url': 'https://via.placeholder.com/300x300?text=BCAA'
    },
    {
        'name': 'Pre-Workout',
        'description': 'Energy booster for intense workout sessions',
        'price': Decimal('2200.00'),
        'category': 'Energy',
        'stock_quantity': 20,
        'image_url': 'https://via.placeholder.com/300x300?text=Pre-Workout'
    },
    {
        'name': 'Multivitamin',
        'description': 'Complete multivitamin for daily health support',
        'price': Decimal('800.00'),
        'category': 'Vitamins',
        'stock_quantity': 40,
        'image_url': 'https://via.placeholder.com/300x300?text=Multivitamin'
    }
]


def seed_defaults(session_factory: sessionmaker, settings: Settings) -> None:
    """Create the default admin and, on an empty catalog, the sample products"""
    db = session_factory()
    try:
        accounts = AccountService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)
        if accounts.ensure_admin(
            settings.DEFAULT_ADMIN_USERNAME,
            settings.DEFAULT_ADMIN_EMAIL,
            settings.DEFAULT_ADMIN_PASSWORD
        ):
            logger.info("✓ Default admin created: %s", settings.DEFAULT_ADMIN_USERNAME)
        
        if db.query(Product).count() == 0:
            repository = ProductRepository(db)
            for data in SAMPLE_PRODUCTS:
                db.add(Product(**data))
            db.commit()
            logger.info("✓ Sample catalog created: %s products", repository.count_active())
    finally:
        db.close()
