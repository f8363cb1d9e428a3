import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from sling_activity.domain.enums import SavingsMovement, TransactionType

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

_NUMBER_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")


@dataclass(frozen=True)
class ActivityRecord:
    """
    A single row of the activity feed, exactly as it is displayed.

    All fields are free text meant for display. `title_right` always
    carries the sign of the movement: "-£100.00" is money leaving the
    account, "+£100.00" is money coming in.
    """
    avatar: str
    title_left: str
    subtitle_left: str
    title_right: str
    subtitle_right: str = ""
    date: Optional[datetime] = None
    id: Optional[str] = None

    @property
    def is_outgoing(self) -> bool:
        return self.title_right.startswith("-")

    @property
    def amount_text(self) -> str:
        """Amount as displayed, without the leading sign"""
        return self.title_right.lstrip("+-")

    @property
    def signed_amount(self) -> Decimal:
        """
        Numeric amount with sign, currency symbols dropped.

        Raises:
            ValueError: If title_right holds no number
        """
        match = _NUMBER_PATTERN.search(self.title_right)
        if match is None:
            raise ValueError(f"No amount found in '{self.title_right}'")

        try:
            value = Decimal(match.group(0).replace(",", ""))
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount '{self.title_right}': {e}")

        return -value if self.is_outgoing else value

    @property
    def formatted_date_short(self) -> str:
        """e.g. '24 Jan', empty when undated"""
        if self.date is None:
            return ""
        return f"{self.date.day} {MONTHS[self.date.month - 1]}"

    @property
    def formatted_date_long(self) -> str:
        """e.g. '24 Jan 2026, 14:30'"""
        if self.date is None:
            return "—"
        return f"{self.formatted_date_short} {self.date.year}, {self.date:%H:%M}"

    def section_title(self, today: Optional["date"] = None) -> str:
        """Feed section heading: Today, Yesterday, or the short date"""
        if self.date is None:
            return "Recent"

        today = today or date.today()
        day = self.date.date()

        if day == today:
            return "Today"
        if day == today - timedelta(days=1):
            return "Yesterday"
        return self.formatted_date_short

    def __repr__(self):
        return f"ActivityRecord({self.avatar!r}, {self.title_left[:30]!r}, {self.title_right})"


@dataclass(frozen=True)
class Classification:
    """
    Result of the single classification pass over a record.

    `savings` is set when the counterparty is the savings pot, so that
    narrative and category logic read the same answer.
    """
    record: ActivityRecord
    type: TransactionType
    savings: Optional[SavingsMovement] = None

    @property
    def is_savings(self) -> bool:
        return self.savings is not None


@dataclass(frozen=True)
class CategoryInfo:
    name: str
    icon: str


@dataclass(frozen=True)
class Narrative:
    """Pieces of a headline like 'You sent £50.00 to Jane'"""
    prefix: str
    amount: str
    suffix: str

    @property
    def headline(self) -> str:
        return " ".join(part for part in (self.prefix, self.amount, self.suffix) if part)
