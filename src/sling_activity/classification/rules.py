from typing import Iterable, List, Optional

from sling_activity.classification.base import ClassificationRule
from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord

# Code points above Latin-1 are treated as emoji. This also catches
# Cyrillic, CJK and other non-Latin initials.
EMOJI_CODEPOINT_THRESHOLD = 255

BANK_AVATAR_KEYWORDS = ["monzo", "wise", "bank"]


def is_likely_emoji(avatar: str) -> bool:
    """True if any character is outside Latin-1"""
    return any(ord(char) > EMOJI_CODEPOINT_THRESHOLD for char in avatar)


def is_person_avatar(avatar: str) -> bool:
    """Named person avatar ('Avatar3') or short initials ('JD'), never an emoji"""
    if avatar.startswith("Avatar"):
        return True
    return len(avatar) <= 2 and not is_likely_emoji(avatar)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class KeywordTypeRule(ClassificationRule):
    """
    Rule that matches keywords in the subtitle or the title.

    Matching is case-insensitive. Subtitle and title keywords are kept
    apart because the feed puts different things in each.

    Example:
        ```
        # "Card payment" in the subtitle -> card payment
        rule = KeywordTypeRule(
            TransactionType.CARD_PAYMENT,
            subtitle_keywords=["card payment"],
        )
        ```
    """

    def __init__(
        self,
        transaction_type: TransactionType,
        subtitle_keywords: Optional[List[str]] = None,
        title_keywords: Optional[List[str]] = None,
    ):
        super().__init__()
        self.transaction_type = transaction_type
        self.subtitle_keywords = [kw.lower() for kw in subtitle_keywords or []]
        self.title_keywords = [kw.lower() for kw in title_keywords or []]

    def _matches(self, record: ActivityRecord) -> bool:
        """Check if any keyword appears in the subtitle or the title"""
        return (
            _contains_any(record.subtitle_left.lower(), self.subtitle_keywords)
            or _contains_any(record.title_left.lower(), self.title_keywords)
        )

    def _get_type(self, _: ActivityRecord) -> TransactionType:
        return self.transaction_type

    def __repr__(self) -> str:
        num_keywords = len(self.subtitle_keywords) + len(self.title_keywords)
        return f"KeywordTypeRule({self.transaction_type.value}, {num_keywords} keywords)"


class CardPaymentRule(KeywordTypeRule):
    """Subtitle says 'Card payment'. Checked before everything else."""

    def __init__(self):
        super().__init__(TransactionType.CARD_PAYMENT, subtitle_keywords=["card payment"])

    def __repr__(self) -> str:
        return "CardPaymentRule()"


class AddMoneyRule(KeywordTypeRule):
    """
    Top ups and money added from a linked account.

    Besides the keywords, an incoming row with no subtitle whose avatar
    is a linked bank account ('AccountMonzo', 'wise.com', ...) is an
    add money.
    """

    def __init__(self):
        super().__init__(
            TransactionType.ADD_MONEY,
            subtitle_keywords=["top up", "added"],
            title_keywords=["top up", "added money"],
        )

    def _matches(self, record: ActivityRecord) -> bool:
        if super()._matches(record):
            return True

        avatar = record.avatar
        return (
            record.subtitle_left == ""
            and not record.is_outgoing
            and (avatar.startswith("Account") or _contains_any(avatar, BANK_AVATAR_KEYWORDS))
        )

    def __repr__(self) -> str:
        return "AddMoneyRule()"


class WithdrawalRule(KeywordTypeRule):

    def __init__(self):
        super().__init__(
            TransactionType.WITHDRAWAL,
            subtitle_keywords=["withdrawal", "withdrew"],
            title_keywords=["withdrawal", "atm"],
        )

    def __repr__(self) -> str:
        return "WithdrawalRule()"


class TransferRule(KeywordTypeRule):

    def __init__(self):
        super().__init__(
            TransactionType.TRANSFER_BETWEEN_ACCOUNTS,
            subtitle_keywords=["transfer", "moved"],
        )

    def __repr__(self) -> str:
        return "TransferRule()"


class SavingsRule(KeywordTypeRule):
    """Savings and interest rows are transfers between own accounts"""

    def __init__(self):
        super().__init__(
            TransactionType.TRANSFER_BETWEEN_ACCOUNTS,
            subtitle_keywords=["saving", "interest"],
            title_keywords=["saving"],
        )

    def __repr__(self) -> str:
        return "SavingsRule()"


class StockRule(ClassificationRule):
    """
    Stock trades. Outgoing money is a buy, incoming money is a sell.
    """

    SUBTITLE_KEYWORDS = ["stock", "invest", "dividend"]

    def _matches(self, record: ActivityRecord) -> bool:
        return (
            record.avatar.startswith("Stock")
            or _contains_any(record.subtitle_left.lower(), self.SUBTITLE_KEYWORDS)
        )

    def _get_type(self, record: ActivityRecord) -> TransactionType:
        if record.is_outgoing:
            return TransactionType.STOCK_BUY
        return TransactionType.STOCK_SELL


class PersonRule(ClassificationRule):
    """Peer to peer payments, recognised by a person avatar"""

    def _matches(self, record: ActivityRecord) -> bool:
        return is_person_avatar(record.avatar)

    def _get_type(self, record: ActivityRecord) -> TransactionType:
        if "received" in record.subtitle_left.lower() or not record.is_outgoing:
            return TransactionType.P2P_RECEIVED
        return TransactionType.P2P_SENT


class OutgoingRule(ClassificationRule):
    """Anything else leaving the account is assumed to be card spend"""

    def _matches(self, record: ActivityRecord) -> bool:
        return record.is_outgoing

    def _get_type(self, _: ActivityRecord) -> TransactionType:
        return TransactionType.CARD_PAYMENT


class DefaultTypeRule(ClassificationRule):
    """
    Fallback rule that always matches.

    Should be the last rule in the chain.
    """

    def __init__(self, default_type: TransactionType = TransactionType.OTHER):
        super().__init__()
        self.default_type = default_type

    def _matches(self, _: ActivityRecord) -> bool:
        """Always matches"""
        return True

    def _get_type(self, _: ActivityRecord) -> TransactionType:
        return self.default_type

    def __repr__(self) -> str:
        return f"DefaultTypeRule('{self.default_type.value}')"
