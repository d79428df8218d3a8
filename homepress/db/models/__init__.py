from homepress.db.models.article import Article
from homepress.db.models.author import Author
from homepress.db.models.category import Category
from homepress.db.models.homepage_section import HomepageSection
from homepress.db.models.user import User
from homepress.db.models.user_permission import UserPermission

__all__ = ["Article", "Author", "Category", "HomepageSection", "User", "UserPermission"]
