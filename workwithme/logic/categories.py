"""Category service: create, list, update and soft delete.

Names are unique among active categories only, so a soft-deleted category's
name becomes available again. Soft delete refuses to orphan active questions
unless asked to cascade, and the cascade runs in the same transaction as the
category update.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from workwithme.db.base import read_only, transaction
from workwithme.logic import repository_categories as repo
from workwithme.logic import repository_questions as question_repo
from workwithme.logic.errors import ConflictError, NotFoundError, ValidationError
from workwithme.logic.ids import later_than, new_object_id, utc_now
from workwithme.models.catalog import Category

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


def _clean_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Category name cannot be empty")
    cleaned = name.strip()
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Category name cannot exceed {MAX_NAME_LENGTH} characters")
    return cleaned


def _check_order(order: object) -> int:
    if isinstance(order, bool) or not isinstance(order, int) or order < 0:
        raise ValidationError("Category order must be a non-negative integer")
    return order


def _duplicate(name: str) -> ConflictError:
    return ConflictError(f"Category with name '{name}' already exists")


def create_category(name: str, order: int = 0) -> Category:
    cleaned = _clean_name(name)
    order = _check_order(order)
    now = utc_now()
    category = Category(id=new_object_id(), name=cleaned, order=order, active=True, created_at=now, updated_at=now)
    try:
        with transaction("category.create") as conn:
            if repo.find_active_by_name(conn, cleaned) is not None:
                raise _duplicate(cleaned)
            repo.insert_category(conn, category)
    except IntegrityError:
        # Lost a race against a concurrent create; the partial unique index caught it
        raise _duplicate(cleaned) from None
    logger.info("category_created id=%s name=%s order=%s", category.id, cleaned, order)
    return category


def list_categories(include_inactive: bool = False) -> list[Category]:
    with read_only("category.list") as conn:
        return repo.list_categories(conn, include_inactive=include_inactive)


def get_category(category_id: str) -> Category | None:
    with read_only("category.get") as conn:
        return repo.fetch_category(conn, category_id)


def update_category(category_id: str, name: str | None = None, order: int | None = None) -> Category:
    """Apply the supplied fields; an update that changes nothing leaves updatedAt alone."""
    changes: dict = {}
    try:
        with transaction("category.update") as conn:
            current = repo.fetch_category(conn, category_id)
            if current is None:
                raise NotFoundError("Category not found")
            if name is not None:
                cleaned = _clean_name(name)
                if cleaned != current.name:
                    if repo.find_active_by_name(conn, cleaned, exclude_id=category_id) is not None:
                        raise _duplicate(cleaned)
                    changes["name"] = cleaned
            if order is not None and _check_order(order) != current.order:
                changes["order"] = order
            if not changes:
                return current
            changes["updated_at"] = later_than(current.updated_at)
            updated = current.model_copy(update=changes)
            repo.save_category(conn, updated)
    except IntegrityError:
        raise _duplicate(str(changes.get("name", name))) from None
    logger.info("category_updated id=%s fields=%s", category_id, sorted(k for k in changes if k != "updated_at"))
    return updated


def soft_delete_category(category_id: str, cascade: bool = False) -> bool:
    """Mark a category inactive; False when it does not exist.

    Raises ConflictError when active questions remain and `cascade` is off.
    """
    with transaction("category.soft_delete") as conn:
        current = repo.fetch_category(conn, category_id)
        if current is None:
            return False
        active_questions = question_repo.count_active_questions(conn, category_id)
        if active_questions > 0 and not cascade:
            raise ConflictError(
                f"Cannot delete category with {active_questions} active questions. "
                "Use cascade=true to soft delete questions as well."
            )
        now = later_than(current.updated_at)
        cascaded = 0
        if cascade and active_questions > 0:
            cascaded = question_repo.deactivate_questions_in_category(conn, category_id, now)
        repo.deactivate_category(conn, category_id, now)
    logger.info("category_soft_deleted id=%s cascade=%s questions_deactivated=%s", category_id, cascade, cascaded)
    return True


__all__ = [
    "MAX_NAME_LENGTH",
    "create_category",
    "list_categories",
    "get_category",
    "update_category",
    "soft_delete_category",
]
