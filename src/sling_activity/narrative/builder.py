from typing import Optional, Union

from sling_activity.classification.classifier import detect_savings
from sling_activity.domain.enums import SavingsMovement, TransactionType
from sling_activity.domain.models import ActivityRecord, Classification, Narrative
from sling_activity.narrative.ticker import TickerResolver


class NarrativeBuilder:
    """
    Turns a classified record into headline pieces.

    'You sent' + '£50.00' + 'to Jane'

    The amount is the record's title_right without its sign, the
    counterparty is title_left.
    """

    def __init__(self, ticker_resolver: Optional[TickerResolver] = None):
        self._ticker_resolver = ticker_resolver

    @property
    def ticker_resolver(self) -> TickerResolver:
        """Lazy-load ticker resolver"""
        if self._ticker_resolver is None:
            self._ticker_resolver = TickerResolver()
        return self._ticker_resolver

    def build(
        self,
        record: ActivityRecord,
        classification: Union[Classification, TransactionType],
    ) -> Narrative:
        """
        Build the narrative for a record.

        Args:
            record: The activity record
            classification: Full classification, or just the type. When only
                the type is given the savings signal is derived here.
        """
        if isinstance(classification, Classification):
            transaction_type = classification.type
            savings = classification.savings
        else:
            transaction_type = classification
            savings = detect_savings(record)

        amount = record.amount_text
        name = record.title_left

        if transaction_type == TransactionType.P2P_SENT:
            return Narrative("You sent", amount, f"to {name}")

        if transaction_type == TransactionType.P2P_RECEIVED:
            return Narrative("You received", amount, f"from {name}")

        if transaction_type == TransactionType.CARD_PAYMENT:
            return Narrative("You spent", amount, f"at {name}")

        if transaction_type == TransactionType.ADD_MONEY:
            return Narrative("You added", amount, f"from {name}")

        if transaction_type == TransactionType.WITHDRAWAL:
            # Out of savings reads "from", out to a bank or ATM reads "to"
            direction = "from" if savings is not None else "to"
            return Narrative("You withdrew", amount, f"{direction} {name}")

        if transaction_type == TransactionType.TRANSFER_BETWEEN_ACCOUNTS:
            return self._transfer_narrative(record, savings)

        if transaction_type == TransactionType.STOCK_BUY:
            ticker = self.ticker_resolver.resolve(
                record.subtitle_right, record.subtitle_left, name=name
            )
            return Narrative("You bought", amount, f"of {ticker}")

        if transaction_type == TransactionType.STOCK_SELL:
            ticker = self.ticker_resolver.resolve(
                record.subtitle_left, record.subtitle_right, name=name
            )
            return Narrative("You sold", amount, f"of {ticker}")

        if record.is_outgoing:
            return Narrative("You paid", amount, f"to {name}")
        return Narrative("You received", amount, f"from {name}")

    def _transfer_narrative(
        self,
        record: ActivityRecord,
        savings: Optional[SavingsMovement],
    ) -> Narrative:
        amount = record.amount_text
        name = record.title_left

        if savings == SavingsMovement.DEPOSIT:
            return Narrative("You added", amount, f"to {name}")
        if savings == SavingsMovement.WITHDRAWAL:
            return Narrative("You withdrew", amount, f"from {name}")

        # Subtitles like "From Main to Savings" are already a suffix
        if "to" in record.subtitle_left.lower():
            return Narrative("You moved", amount, record.subtitle_left)
        return Narrative("You moved", amount, f"from {name}")

    def __repr__(self) -> str:
        return "NarrativeBuilder()"


_default_builder: Optional[NarrativeBuilder] = None


def build_narrative(
    record: ActivityRecord,
    classification: Union[Classification, TransactionType],
) -> Narrative:
    """Build a narrative with the default ticker table"""
    global _default_builder
    if _default_builder is None:
        _default_builder = NarrativeBuilder()
    return _default_builder.build(record, classification)
