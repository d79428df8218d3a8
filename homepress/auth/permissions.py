"""Category-scoped authorization.

Every mutation of category-owned content is checked against the capability
matrix: one ``UserPermission`` row per (user, category) holding add/edit/delete
flags. Superadmins bypass the matrix entirely.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from homepress.lib.exceptions import PermissionDenied

Action = Literal["add", "edit", "delete"]

_ACTION_FLAGS: dict[str, str] = {
    "add": "can_add",
    "edit": "can_edit",
    "delete": "can_delete",
}


class UserLike(Protocol):
    id: int
    is_superadmin: bool


class PermissionLike(Protocol):
    category_id: int
    can_add: bool
    can_edit: bool
    can_delete: bool


def find_permission(
    permissions: Iterable[PermissionLike], category_id: int
) -> PermissionLike | None:
    for perm in permissions:
        if perm.category_id == category_id:
            return perm
    return None


def has_permission(
    user: UserLike,
    permissions: Iterable[PermissionLike],
    category_id: int,
    action: Action,
) -> bool:
    """Check whether user may perform action in category.

    Pure lookup with no caching. A missing row means no capability.
    """
    if user.is_superadmin:
        return True

    perm = find_permission(permissions, category_id)
    if perm is None:
        return False

    flag = _ACTION_FLAGS.get(action)
    if flag is None:
        return False
    return bool(getattr(perm, flag))


def has_any_flag(perm: Any) -> bool:
    return bool(perm.can_add or perm.can_edit or perm.can_delete)


def visible_category_ids(
    user: UserLike, permissions: Iterable[PermissionLike]
) -> set[int] | None:
    """Categories a user may see in admin lists; None means all of them."""
    if user.is_superadmin:
        return None
    return {perm.category_id for perm in permissions}


def filter_visible_categories(
    user: UserLike,
    permissions: Iterable[PermissionLike],
    categories: Iterable[Any],
) -> list[Any]:
    """Restrict a category list to those with a permission row (no row means invisible)."""
    allowed = visible_category_ids(user, permissions)
    if allowed is None:
        return list(categories)
    return [c for c in categories if c.id in allowed]


def filter_visible_articles(
    user: UserLike,
    permissions: Iterable[PermissionLike],
    articles: Iterable[Any],
) -> list[Any]:
    allowed = visible_category_ids(user, permissions)
    if allowed is None:
        return list(articles)
    return [a for a in articles if a.category_id in allowed]


def can_add_any(user: UserLike, permissions: Iterable[PermissionLike]) -> bool:
    """Whether the user may create an article in at least one category."""
    return user.is_superadmin or any(perm.can_add for perm in permissions)


@dataclass
class PermissionGrant:
    """A submitted cell of the capability matrix."""

    category_id: int
    can_add: bool = False
    can_edit: bool = False
    can_delete: bool = False


def prune_permissions(grants: Iterable[Any]) -> list[PermissionGrant]:
    """Collapse a submitted matrix to the rows worth persisting.

    One row per category (the last submitted wins), and rows with every
    flag false are dropped.
    """
    by_category: dict[int, PermissionGrant] = {}
    for grant in grants:
        by_category[grant.category_id] = PermissionGrant(
            category_id=grant.category_id,
            can_add=bool(grant.can_add),
            can_edit=bool(grant.can_edit),
            can_delete=bool(grant.can_delete),
        )
    return [g for g in by_category.values() if has_any_flag(g)]


@dataclass
class AdminContext:
    """The acting administrator, passed explicitly into every mutation."""

    user: Any
    permissions: Sequence[Any] = field(default_factory=list)

    @property
    def is_superadmin(self) -> bool:
        return bool(self.user.is_superadmin)

    def can(self, category_id: int, action: Action) -> bool:
        return has_permission(self.user, self.permissions, category_id, action)

    def require(self, category_id: int, action: Action) -> None:
        """Raise PermissionDenied unless the user may act in the category."""
        if not self.can(category_id, action):
            raise PermissionDenied(
                f"You don't have permission to {action} in this category"
            )

    def require_superadmin(self) -> None:
        if not self.is_superadmin:
            raise PermissionDenied("Only a superadmin can do this")
