"""
Display categories for activity feed rows.

Quick Start:
    >>> from sling_activity.categorization import CategoryResolver
    >>>
    >>> resolver = CategoryResolver()
    >>> category = resolver.resolve(record, transaction_type)
    >>> print(f"{category.name} ({category.icon})")
"""
from sling_activity.categorization.resolver import CategoryResolver, resolve_category
from sling_activity.categorization.base import CategoryRule
from sling_activity.categorization.rules import (
    SavingsCategoryRule,
    TypeCategoryRule,
    KeywordCategoryRule,
    DefaultCategoryRule,
)

__all__ = [
    "CategoryResolver",
    "CategoryRule",
    "SavingsCategoryRule",
    "TypeCategoryRule",
    "KeywordCategoryRule",
    "DefaultCategoryRule",
    "resolve_category",
]
