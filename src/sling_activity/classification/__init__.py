"""
Transaction type classification for activity feed rows.

Assigns one TransactionType to every record using a chain of
responsibility of text-matching rules, first match wins.

Quick Start:
    >>> from sling_activity.classification import TransactionClassifier
    >>>
    >>> classifier = TransactionClassifier()
    >>> transaction_type = classifier.classify(record)
"""
from sling_activity.classification.classifier import (
    TransactionClassifier,
    classify,
    detect_savings,
)
from sling_activity.classification.base import ClassificationRule
from sling_activity.classification.rules import (
    KeywordTypeRule,
    CardPaymentRule,
    AddMoneyRule,
    WithdrawalRule,
    TransferRule,
    SavingsRule,
    StockRule,
    PersonRule,
    OutgoingRule,
    DefaultTypeRule,
    is_likely_emoji,
    is_person_avatar,
)

__all__ = [
    "TransactionClassifier",
    "ClassificationRule",
    "KeywordTypeRule",
    "CardPaymentRule",
    "AddMoneyRule",
    "WithdrawalRule",
    "TransferRule",
    "SavingsRule",
    "StockRule",
    "PersonRule",
    "OutgoingRule",
    "DefaultTypeRule",
    "classify",
    "detect_savings",
    "is_likely_emoji",
    "is_person_avatar",
]
