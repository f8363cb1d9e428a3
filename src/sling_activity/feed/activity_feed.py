import random
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Union

from sling_activity.domain.models import ActivityRecord
from sling_activity.utils.logging_config import get_logger

logger = get_logger(__name__)

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
}

Subscriber = Callable[[List[ActivityRecord]], None]

SAMPLE_MERCHANTS = [
    ("Tesco", "tesco.com"),
    ("Amazon", "amazon.com"),
    ("Uber", "uber.com"),
    ("Deliveroo", "deliveroo.com"),
    ("Netflix", "netflix.com"),
    ("Spotify", "spotify.com"),
    ("Costa", "costa.co.uk"),
    ("Apple", "apple.com"),
    ("TfL", "tfl.gov.uk"),
    ("Sainsbury's", "sainsburys.co.uk"),
]

SAMPLE_CONTACTS = [
    ("Emma", "E"),
    ("James", "J"),
    ("Sarah", "S"),
    ("Michael", "M"),
    ("Lucy", "L"),
    ("Tom", "T"),
    ("Sophie", "S"),
    ("Ben", "B"),
]

TOP_UP_SOURCES = ["Bank Transfer", "Apple Pay", "Debit Card"]
WITHDRAWAL_METHODS = ["ATM", "Bank Transfer", "Cash Back"]


def format_amount(amount: Union[float, Decimal], sign: str, currency: str = "GBP") -> str:
    """
    Format an amount the way the feed displays it, e.g. '-£12.50'.

    Unknown currencies use the currency code as the symbol.
    """
    if sign not in ("+", "-"):
        raise ValueError(f"Sign must be '+' or '-', got {sign!r}")

    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{sign}{symbol}{amount:.2f}"


class ActivityFeed:
    """
    In-memory activity feed.

    Holds records added locally (payments made in this session) and
    records fetched from an external feed. Consumers get the combined
    list, newest first, and can subscribe to be told when it changes.

    Usage:
        feed = ActivityFeed()
        unsubscribe = feed.subscribe(lambda activities: print(len(activities)))

        feed.record_card_payment("Boots", "boots.com", 12.50)
        feed.set_fetched(ActivityFeedParser().parse("feed.csv"))

        unsubscribe()
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
    ):
        self._clock = clock
        self._rng = rng or random.Random()
        self._local: List[ActivityRecord] = []
        self._fetched: List[ActivityRecord] = []
        self._activities: List[ActivityRecord] = []
        self._subscribers: List[Subscriber] = []
        self.is_active_user = False

    @property
    def activities(self) -> List[ActivityRecord]:
        """Combined local and fetched records, newest first"""
        return list(self._activities)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked with the new activity list after every change.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def add_activity(
        self,
        avatar: str,
        title_left: str,
        subtitle_left: str,
        title_right: str,
        subtitle_right: str = "",
        date: Optional[datetime] = None,
    ) -> ActivityRecord:
        """Add a locally created record to the top of the feed"""
        record = ActivityRecord(
            avatar=avatar,
            title_left=title_left,
            subtitle_left=subtitle_left,
            title_right=title_right,
            subtitle_right=subtitle_right,
            date=date or self._clock(),
        )

        self._local.insert(0, record)
        self.is_active_user = True
        logger.debug("Added activity %r", record)

        self._update()
        return record

    def set_fetched(self, records: List[ActivityRecord]) -> None:
        """Replace the records that came from the external feed"""
        self._fetched = list(records)
        logger.info("Loaded %d fetched activities", len(self._fetched))
        self._update()

    def clear(self) -> None:
        """Drop every record and reset to a new user"""
        self._local = []
        self._fetched = []
        self.is_active_user = False
        logger.info("Cleared all activities")
        self._update()

    def _update(self) -> None:
        combined = self._local + self._fetched
        # Undated records first, then newest first
        combined.sort(key=lambda r: (r.date is None, r.date or datetime.min), reverse=True)
        self._activities = combined

        for callback in list(self._subscribers):
            callback(self.activities)

    # Convenience recorders

    def record_add_money(
        self,
        from_account_name: str,
        from_account_avatar: str,
        amount: float,
        currency: str = "GBP",
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=from_account_avatar,
            title_left=from_account_name,
            subtitle_left="",
            title_right=format_amount(amount, "+", currency),
        )

    def record_buy_stock(
        self,
        stock_name: str,
        stock_icon: str,
        amount: float,
        shares: float,
        symbol: str,
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=stock_icon,
            title_left=stock_name,
            subtitle_left="",
            title_right=format_amount(amount, "-"),
            subtitle_right=f"+{shares:.2f} {symbol}",
        )

    def record_sell_stock(
        self,
        stock_name: str,
        stock_icon: str,
        amount: float,
        shares: float,
        symbol: str,
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=stock_icon,
            title_left=stock_name,
            subtitle_left=f"Sold {shares:.2f} {symbol}",
            title_right=format_amount(amount, "+"),
        )

    def record_send_money(
        self,
        to_contact_name: str,
        to_contact_avatar: str,
        amount: float,
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=to_contact_avatar,
            title_left=to_contact_name,
            subtitle_left="",
            title_right=format_amount(amount, "-"),
        )

    def record_request_money(
        self,
        from_contact_name: str,
        from_contact_avatar: str,
        amount: float,
    ) -> ActivityRecord:
        # Requested money is expected to come in
        return self.add_activity(
            avatar=from_contact_avatar,
            title_left=from_contact_name,
            subtitle_left="Requested",
            title_right=format_amount(amount, "+"),
        )

    def record_split_bill(
        self,
        merchant_name: str,
        merchant_avatar: str,
        split_amount: float,
        with_contact_name: str,
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=merchant_avatar,
            title_left=merchant_name,
            subtitle_left=f"Split with {with_contact_name}",
            title_right=format_amount(split_amount, "-"),
        )

    def record_card_payment(
        self,
        merchant_name: str,
        merchant_avatar: str,
        amount: float,
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=merchant_avatar,
            title_left=merchant_name,
            subtitle_left="Card payment",
            title_right=format_amount(amount, "-"),
        )

    def record_received_money(
        self,
        from_contact_name: str,
        from_contact_avatar: str,
        amount: float,
    ) -> ActivityRecord:
        return self.add_activity(
            avatar=from_contact_avatar,
            title_left=from_contact_name,
            subtitle_left="Received",
            title_right=format_amount(amount, "+"),
        )

    def record_top_up(self, amount: float, source: str = "Bank Transfer") -> ActivityRecord:
        return self.add_activity(
            avatar="🏦",
            title_left="Top Up",
            subtitle_left=source,
            title_right=format_amount(amount, "+"),
        )

    def record_withdrawal(self, amount: float, method: str = "ATM") -> ActivityRecord:
        return self.add_activity(
            avatar="💳",
            title_left="Withdrawal",
            subtitle_left=method,
            title_right=format_amount(amount, "-"),
        )

    # Demo data

    def generate_card_payment(self) -> ActivityRecord:
        name, avatar = self._rng.choice(SAMPLE_MERCHANTS)
        return self.record_card_payment(name, avatar, self._rng.uniform(2.50, 85.00))

    def generate_p2p_outbound(self) -> ActivityRecord:
        name, avatar = self._rng.choice(SAMPLE_CONTACTS)
        return self.record_send_money(name, avatar, self._rng.uniform(5.00, 100.00))

    def generate_p2p_inbound(self) -> ActivityRecord:
        name, avatar = self._rng.choice(SAMPLE_CONTACTS)
        return self.record_received_money(name, avatar, self._rng.uniform(5.00, 150.00))

    def generate_top_up(self) -> ActivityRecord:
        return self.record_top_up(
            self._rng.uniform(20.00, 500.00),
            source=self._rng.choice(TOP_UP_SOURCES),
        )

    def generate_withdrawal(self) -> ActivityRecord:
        return self.record_withdrawal(
            self._rng.uniform(10.00, 200.00),
            method=self._rng.choice(WITHDRAWAL_METHODS),
        )

    def generate_random_mix(self, count: int = 8) -> List[ActivityRecord]:
        """Add `count` records, each from a randomly picked generator"""
        generators = [
            self.generate_card_payment,
            self.generate_p2p_outbound,
            self.generate_p2p_inbound,
            self.generate_top_up,
            self.generate_withdrawal,
        ]
        return [self._rng.choice(generators)() for _ in range(count)]

    def __len__(self) -> int:
        return len(self._activities)

    def __repr__(self) -> str:
        return f"ActivityFeed({len(self._local)} local, {len(self._fetched)} fetched)"
