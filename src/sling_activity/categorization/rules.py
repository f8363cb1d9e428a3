from typing import Dict, List

from sling_activity.categorization.base import CategoryRule
from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord, CategoryInfo, Classification


def category_from_config(entry: Dict) -> CategoryInfo:
    return CategoryInfo(name=entry["name"], icon=entry["icon"])


SAVINGS_MOVEMENT_TYPES = (
    TransactionType.TRANSFER_BETWEEN_ACCOUNTS,
    TransactionType.WITHDRAWAL,
)


class SavingsCategoryRule(CategoryRule):
    """
    Money moved in or out of savings.

    Only transfers and withdrawals count. A card payment at a shop with
    "savings" in its name keeps its merchant category.
    """

    def __init__(self, category: CategoryInfo):
        super().__init__()
        self.category = category

    def _matches(self, classification: Classification) -> bool:
        return classification.is_savings and classification.type in SAVINGS_MOVEMENT_TYPES

    def _get_category(self, _: Classification) -> CategoryInfo:
        return self.category

    def __repr__(self) -> str:
        return f"SavingsCategoryRule('{self.category.name}')"


class TypeCategoryRule(CategoryRule):
    """
    Fixed category per transaction type.

    Example:
        rule = TypeCategoryRule({
            TransactionType.WITHDRAWAL: CategoryInfo("Withdrawal", "arrow.down.circle"),
        })
    """

    def __init__(self, type_map: Dict[TransactionType, CategoryInfo]):
        super().__init__()
        self.type_map = type_map

    @classmethod
    def from_config(cls, types_config: Dict[str, Dict]) -> "TypeCategoryRule":
        """
        Build from the 'types' section of categories.json.

        Raises:
            ValueError: If a key is not a known transaction type
        """
        return cls({
            TransactionType(type_value): category_from_config(entry)
            for type_value, entry in types_config.items()
        })

    def _matches(self, classification: Classification) -> bool:
        return classification.type in self.type_map

    def _get_category(self, classification: Classification) -> CategoryInfo:
        return self.type_map[classification.type]

    def __repr__(self) -> str:
        return f"TypeCategoryRule({len(self.type_map)} types)"


class KeywordCategoryRule(CategoryRule):
    """
    Rule that matches keywords in the merchant name, and optionally the subtitle.

    Matching is case-insensitive.

    Example:
        ```
        rule = KeywordCategoryRule(
            CategoryInfo("Transport", "car.fill"),
            ["uber", "lyft"],
        )
        ```
    """

    def __init__(
        self,
        category: CategoryInfo,
        keywords: List[str],
        include_subtitle: bool = False,
    ):
        super().__init__()
        self.category = category
        self.keywords = [kw.lower() for kw in keywords]
        self.include_subtitle = include_subtitle

    def _matches(self, classification: Classification) -> bool:
        return self.matches(classification.record)

    def matches(self, record: ActivityRecord) -> bool:
        """True if any keyword appears in the record's text, whatever its type"""
        merchant = record.title_left.lower()
        subtitle = record.subtitle_left.lower() if self.include_subtitle else ""

        for keyword in self.keywords:
            if keyword in merchant or keyword in subtitle:
                return True

        return False

    def _get_category(self, _: Classification) -> CategoryInfo:
        return self.category

    def __repr__(self) -> str:
        return f"KeywordCategoryRule('{self.category.name}', {len(self.keywords)} keywords)"


class DefaultCategoryRule(CategoryRule):
    """
    Fallback rule that always matches.

    Should be the last rule in the chain.
    """

    def __init__(self, category: CategoryInfo = CategoryInfo("General", "bag.fill")):
        super().__init__()
        self.category = category

    def _matches(self, _: Classification) -> bool:
        """Always matches"""
        return True

    def _get_category(self, _: Classification) -> CategoryInfo:
        return self.category

    def __repr__(self) -> str:
        return f"DefaultCategoryRule('{self.category.name}')"
