from abc import ABC, abstractmethod
from typing import Optional

from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord

class ClassificationRule(ABC):
    """
    Abstract base class for all transaction type rules.

    Implements Chain of Responsibility:
    - Each rule tries to recognise a record
    - If it can't it passes to the next rule
    - Rules are tried in priority order, first match wins

    Usage:
        ```
        card_rule = CardPaymentRule()
        add_money_rule = AddMoneyRule()
        default_rule = DefaultTypeRule()

        card_rule.set_next(add_money_rule).set_next(default_rule)

        transaction_type = card_rule.classify(record)
        ```
    """

    def __init__(self):
        self._next_rule: Optional['ClassificationRule'] = None

    def set_next(self, rule: 'ClassificationRule') -> 'ClassificationRule':
        """
        Set the next rule in the chain.

        Args:
            rule: The next rule to try if this one doesn't match

        Returns:
            The rule that was set (for chaining)

        Example:
            `rule1.set_next(rule2).set_next(rule3)`
        """
        if not isinstance(rule, ClassificationRule):
            raise TypeError(f"{rule!r} must inherit from ClassificationRule")

        self._next_rule = rule
        return rule

    @property
    def next_rule(self) -> Optional['ClassificationRule']:
        return self._next_rule

    @abstractmethod
    def _matches(self, record: ActivityRecord) -> bool:
        """
        Check if this rule recognises the record.

        Args:
            record: Activity record to check

        Returns:
            True if this rule can assign a type to the record
        """
        pass

    @abstractmethod
    def _get_type(self, record: ActivityRecord) -> TransactionType:
        """
        Get the transaction type for the record.

        Called only if _matches() returns True.
        """
        pass

    def find_match(self, record: ActivityRecord) -> Optional['ClassificationRule']:
        """Return the first rule in the chain (starting here) that matches"""
        rule: Optional[ClassificationRule] = self
        while rule is not None:
            if rule._matches(record):
                return rule
            rule = rule._next_rule
        return None

    def classify(self, record: ActivityRecord) -> Optional[TransactionType]:
        """
        Attempt to classify a record.

        Returns:
            Transaction type, or None if no rule in the chain matched
        """
        rule = self.find_match(record)
        if rule is None:
            return None
        return rule._get_type(record)

    def __repr__(self):
        return f"{self.__class__.__name__}()"
