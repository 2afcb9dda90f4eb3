# boutique/db/seed.py
import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.auth_utils import hash_password
from boutique.config import ConfigurationError, Settings
from boutique.db.functions import count_products, create_product, create_user, get_user_by_email
from boutique.db.models import RoleEnum

logger = logging.getLogger("boutique.seed")

SAMPLE_PRODUCTS = [
    {
        "name": "Ordinateur Portable HP",
        "description": 'Ordinateur portable 15.6", 8GB RAM, 512GB SSD, Intel Core i5',
        "price": 450000,
        "category": "ordinateurs",
        "image": "https://images.unsplash.com/photo-1593642632823-8f785ba67e45",
        "stock": 10,
        "featured": True,
    },
    {
        "name": "Veste en Cuir Premium",
        "description": "Veste en cuir véritable pour homme, style motard",
        "price": 85000,
        "category": "vetements",
        "image": "https://images.unsplash.com/photo-1591047139829-d91aecb6caea",
        "stock": 15,
        "featured": True,
    },
    {
        "name": "Machine à Coudre Professionnelle",
        "description": "Machine à coudre avec 32 points programmés, idéale pour la confection",
        "price": 120000,
        "category": "confection",
        "image": "https://images.unsplash.com/photo-1506629905877-52a5ca6d63b1",
        "stock": 8,
        "featured": False,
    },
    {
        "name": "Robe Élégante Soirée",
        "description": "Robe longue élégante pour occasions spéciales, plusieurs coloris disponibles",
        "price": 65000,
        "category": "vetements",
        "image": "https://images.unsplash.com/photo-1583394838336-acd977736f90",
        "stock": 12,
        "featured": True,
    },
]


def normalize_email(email: str) -> str:
    """Normalize an address the way request validation does, so the account can log in."""
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as exc:
        raise ConfigurationError(f"ADMIN_EMAIL is not a valid address: {exc}") from exc


async def seed_demo_data(db: AsyncSession, settings: Settings) -> None:
    """Insert the sample catalog and the configured admin account if they are missing."""
    if await count_products(db) == 0:
        for product_data in SAMPLE_PRODUCTS:
            await create_product(db, dict(product_data))
        logger.info("Seeded %s sample products", len(SAMPLE_PRODUCTS))

    if settings.admin_email and settings.admin_password:
        admin_email = normalize_email(settings.admin_email)
        if await get_user_by_email(db, admin_email) is None:
            await create_user(
                db,
                name="Admin",
                email=admin_email,
                hashed_password=hash_password(settings.admin_password, rounds=settings.bcrypt_rounds),
                role=RoleEnum.admin,
            )
            logger.info("Seeded admin account")
