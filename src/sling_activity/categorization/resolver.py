from typing import Any, Dict, List, Optional, Union

from sling_activity.categorization.base import CategoryRule
from sling_activity.categorization.rules import (
    SavingsCategoryRule,
    TypeCategoryRule,
    KeywordCategoryRule,
    DefaultCategoryRule,
    category_from_config,
)
from sling_activity.classification.classifier import detect_savings
from sling_activity.config.settings import ConfigLoader
from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord, CategoryInfo, Classification
from sling_activity.utils.logging_config import get_logger

logger = get_logger(__name__)


class CategoryResolver:
    """
    Picks a display category and icon for a classified record.

    Builds a chain of rules in priority order:
    1. Savings
    2. Fixed category per transaction type (P2P, withdrawal, deposit, transfer)
    3. Subscription keywords (merchant and subtitle)
    4. Merchant keyword buckets (shopping, transport, food, entertainment)
    5. Default (General)

    Usage:
        # Production - loads categories.json through ConfigLoader
        resolver = CategoryResolver()

        # Testing - inject custom config
        resolver = CategoryResolver(config={"merchants": [...]})

        category = resolver.resolve(record, TransactionType.CARD_PAYMENT)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize category resolver.

        Args:
            config: Optional config dict in the categories.json layout.
                If None, loads from ConfigLoader.
        """
        self.config = self._load_config(config)
        self._subscription_rule: Optional[KeywordCategoryRule] = None
        self._rule_chain: Optional[CategoryRule] = None

        self._build_rule_chain()

    def _load_config(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if config is not None:
            return config

        try:
            return ConfigLoader.load_categories_config()
        except FileNotFoundError:
            logger.warning("No categories.json found, every record will use the default category")
            return {}

    def _build_rule_chain(self) -> None:
        rules: List[CategoryRule] = []

        if "savings" in self.config:
            rules.append(SavingsCategoryRule(category_from_config(self.config["savings"])))

        if self.config.get("types"):
            rules.append(TypeCategoryRule.from_config(self.config["types"]))

        subscriptions = self.config.get("subscriptions")
        if subscriptions:
            self._subscription_rule = KeywordCategoryRule(
                category_from_config(subscriptions),
                subscriptions.get("keywords", []),
                include_subtitle=True,
            )
            rules.append(self._subscription_rule)

        for bucket in self.config.get("merchants", []):
            rules.append(
                KeywordCategoryRule(category_from_config(bucket), bucket.get("keywords", []))
            )

        default = self.config.get("default")
        if default:
            rules.append(DefaultCategoryRule(category_from_config(default)))
        else:
            rules.append(DefaultCategoryRule())

        self._rule_chain = rules[0]
        for i in range(len(rules) - 1):
            rules[i].set_next(rules[i + 1])

    def resolve(
        self,
        record: ActivityRecord,
        classification: Union[Classification, TransactionType],
    ) -> CategoryInfo:
        """
        Categorize a record.

        Args:
            record: The activity record
            classification: Full classification, or just the type. When only
                the type is given the savings signal is derived here.
        """
        if not isinstance(classification, Classification):
            classification = Classification(
                record=record,
                type=classification,
                savings=detect_savings(record),
            )

        category = self._rule_chain.resolve(classification)

        assert category is not None, "Rule chain should never return None"

        return category

    def is_subscription(self, record: ActivityRecord) -> bool:
        """True if the merchant or subtitle names a known subscription service"""
        if self._subscription_rule is None:
            return False

        return self._subscription_rule.matches(record)

    def get_rule_chain_info(self) -> str:
        """String description of the current rule chain"""
        rules = []
        current = self._rule_chain
        priority = 1

        while current:
            rules.append(f"{priority}. {current}")
            current = current.next_rule
            priority += 1

        return "\n".join(rules)

    def __repr__(self) -> str:
        num_rules = 0
        current = self._rule_chain
        while current:
            num_rules += 1
            current = current.next_rule

        return f"CategoryResolver({num_rules} rules in chain)"


_default_resolver: Optional[CategoryResolver] = None


def resolve_category(
    record: ActivityRecord,
    classification: Union[Classification, TransactionType],
) -> CategoryInfo:
    """Categorize a record with the default category tables"""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = CategoryResolver()
    return _default_resolver.resolve(record, classification)
