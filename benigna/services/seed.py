# benigna-api/benigna/services/seed.py
import logging

from benigna import config
from benigna.auth.security import hash_password
from benigna.db.repository import Repository
from benigna.models.category import CategoryInDB
from benigna.models.user import UserInDB, UserType
from benigna.services.categories import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


def seed_defaults(repo: Repository) -> None:
    """Create the admin account and the category list on an empty store."""
    if not repo.get_users():
        admin = UserInDB(
            name="Administrador",
            email=config.ADMIN_EMAIL,
            phone="11999999999",
            type=UserType.ADMIN,
            password_hash=hash_password(config.ADMIN_PASSWORD),
        )
        repo.save_user(admin)
        logger.info("Created admin account %s", admin.email)

    if not repo.get_categories():
        for name, icon, subcategories in DEFAULT_CATEGORIES:
            category = CategoryInDB(name=name, icon=icon)
            for sub in subcategories:
                category.add_subcategory(sub)
            repo.save_category(category)
        logger.info("Created %d default categories", len(DEFAULT_CATEGORIES))
