from abc import ABC, abstractmethod
from typing import Optional

from sling_activity.domain.models import CategoryInfo, Classification

class CategoryRule(ABC):
    """
    Abstract base class for all category rules.

    Same chain of responsibility as the classification rules, but rules
    see the whole Classification so they can use the transaction type
    and the savings signal as well as the raw text.
    """

    def __init__(self):
        self._next_rule: Optional['CategoryRule'] = None

    def set_next(self, rule: 'CategoryRule') -> 'CategoryRule':
        """
        Set the next rule in the chain.

        Returns:
            The rule that was set (for chaining)
        """
        if not isinstance(rule, CategoryRule):
            raise TypeError(f"{rule!r} must inherit from CategoryRule")

        self._next_rule = rule
        return rule

    @property
    def next_rule(self) -> Optional['CategoryRule']:
        return self._next_rule

    @abstractmethod
    def _matches(self, classification: Classification) -> bool:
        pass

    @abstractmethod
    def _get_category(self, classification: Classification) -> CategoryInfo:
        """Called only if _matches() returns True."""
        pass

    def resolve(self, classification: Classification) -> Optional[CategoryInfo]:
        """
        Attempt to categorize a classified record.

        Returns:
            Category, or None if no rule in the chain matched
        """
        rule: Optional[CategoryRule] = self
        while rule is not None:
            if rule._matches(classification):
                return rule._get_category(classification)
            rule = rule._next_rule

        return None

    def __repr__(self):
        return f"{self.__class__.__name__}()"
