"""SQLModel implementation of the category registry."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...constants.categories import DEFAULT_CATEGORIES, FALLBACK_CATEGORY
from ...domain.repositories.category import CategoryInfo
from ...models.category import Category


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: str) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.get(Category, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def resolve(self, category_id: Optional[str]) -> Optional[CategoryInfo]:
        """Return display metadata, or None when the id is unknown."""
        if not category_id:
            return None
        category = self.get_by_id(category_id)
        if category is None:
            return None
        return CategoryInfo(name=category.name, color=category.color, icon=category.icon)

    def display_for(self, category_id: Optional[str]) -> CategoryInfo:
        """Like ``resolve`` but falls back to a neutral placeholder."""
        return self.resolve(category_id) or FALLBACK_CATEGORY

    def list_all(self) -> list[Category]:
        with self.session_factory() as session:
            rows = list(session.exec(select(Category).order_by(Category.name)).all())  # type: ignore
            session.expunge_all()
            return rows

    def list_by_kind(self, kind: str) -> list[Category]:
        """List categories filtered by kind (income/expense)."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.kind == kind)
                .order_by(Category.name)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def delete(self, category_id: str) -> bool:
        """Delete a category by ID."""
        with self.session_factory() as session:
            category = session.get(Category, category_id)
            if category is None:
                return False
            session.delete(category)
            session.commit()
            return True

    def seed_defaults(self) -> int:
        """Insert the default categories that are missing; returns how many were added."""
        with self.session_factory() as session:
            existing = {
                (row.name, row.kind) for row in session.exec(select(Category)).all()
            }
            added = 0
            for entry in DEFAULT_CATEGORIES:
                if (entry["name"], entry["kind"]) in existing:
                    continue
                session.add(Category(**entry))
                added += 1
            session.commit()
            return added
