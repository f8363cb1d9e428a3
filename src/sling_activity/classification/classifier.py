from typing import List, Optional

from sling_activity.classification.base import ClassificationRule
from sling_activity.classification.rules import (
    CardPaymentRule,
    AddMoneyRule,
    WithdrawalRule,
    TransferRule,
    SavingsRule,
    StockRule,
    PersonRule,
    OutgoingRule,
    DefaultTypeRule,
)
from sling_activity.domain.enums import SavingsMovement, TransactionType
from sling_activity.domain.models import ActivityRecord, Classification
from sling_activity.utils.logging_config import get_logger

logger = get_logger(__name__)


def detect_savings(record: ActivityRecord) -> Optional[SavingsMovement]:
    """
    Work out whether the counterparty is the savings pot, and which way
    the money went.

    Returns:
        DEPOSIT or WITHDRAWAL for savings rows, None otherwise
    """
    is_savings = "Savings" in record.avatar or "savings" in record.title_left.lower()
    if not is_savings:
        return None

    if "deposit" in record.subtitle_left.lower():
        return SavingsMovement.DEPOSIT
    return SavingsMovement.WITHDRAWAL


class TransactionClassifier:
    """
    Assigns a TransactionType to activity records.

    Builds a chain of rules in priority order:
    1. Card payment (explicit subtitle)
    2. Add money / top up
    3. Withdrawal
    4. Transfer between accounts
    5. Savings and interest
    6. Stock buy / sell
    7. Person avatar (P2P)
    8. Outgoing fallback (card spend)
    9. Default (other)

    Usage:
        classifier = TransactionClassifier()
        transaction_type = classifier.classify(record)
        classification = classifier.classify_detailed(record)
    """

    def __init__(self, rules: Optional[List[ClassificationRule]] = None):
        """
        Initialize the classifier.

        Args:
            rules: Optional custom rule list, tried in order. A DefaultTypeRule
                is appended so that classification is always total.
        """
        self._rule_chain: Optional[ClassificationRule] = None
        self._build_rule_chain(rules)

    @staticmethod
    def default_rules() -> List[ClassificationRule]:
        return [
            CardPaymentRule(),
            AddMoneyRule(),
            WithdrawalRule(),
            TransferRule(),
            SavingsRule(),
            StockRule(),
            PersonRule(),
            OutgoingRule(),
        ]

    def _build_rule_chain(self, rules: Optional[List[ClassificationRule]] = None) -> None:
        rules = list(rules) if rules is not None else self.default_rules()

        if not rules or not isinstance(rules[-1], DefaultTypeRule):
            rules.append(DefaultTypeRule())

        self._rule_chain = rules[0]
        for i in range(len(rules) - 1):
            rules[i].set_next(rules[i + 1])

    def classify(self, record: ActivityRecord) -> TransactionType:
        """
        Classify a single record.

        Example:
            ```
            >>> classifier = TransactionClassifier()
            >>> classifier.classify(ActivityRecord("boots.com", "Boots", "Card payment", "-£100.00"))
            <TransactionType.CARD_PAYMENT: 'cardPayment'>
            ```
        """
        if not self._rule_chain:
            raise RuntimeError("Rule chain not initialized")

        transaction_type = self._rule_chain.classify(record)

        assert transaction_type is not None, "Rule chain should never return None"

        logger.debug("Classified %r as %s", record, transaction_type.value)
        return transaction_type

    def classify_detailed(self, record: ActivityRecord) -> Classification:
        """Classify a record and attach the savings signal"""
        return Classification(
            record=record,
            type=self.classify(record),
            savings=detect_savings(record),
        )

    def classify_many(self, records: List[ActivityRecord]) -> List[Classification]:
        return [self.classify_detailed(record) for record in records]

    def explain(self, record: ActivityRecord) -> str:
        """Name of the rule that decided the record's type"""
        rule = self._rule_chain.find_match(record)
        return repr(rule)

    def get_rule_chain_info(self) -> str:
        """
        Get information about the current rule chain.

        Useful for debugging and understanding which rules are active.
        """
        if not self._rule_chain:
            return "No rules loaded"

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

        return f"TransactionClassifier({num_rules} rules in chain)"


_default_classifier: Optional[TransactionClassifier] = None


def _get_default_classifier() -> TransactionClassifier:
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = TransactionClassifier()
    return _default_classifier


def classify(record: ActivityRecord) -> TransactionType:
    """Classify a record with the default rule chain"""
    return _get_default_classifier().classify(record)
