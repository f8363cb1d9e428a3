"""
Service layer models - DTOs for service operations.

These models represent the results of service operations, not domain entities.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Tuple

from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord, CategoryInfo, Narrative


@dataclass(frozen=True)
class ActivityDescription:
    """Everything the detail view needs to render one record"""
    record: ActivityRecord
    type: TransactionType
    narrative: Narrative
    category: CategoryInfo
    is_subscription: bool = False
    actions: Tuple[str, ...] = ()

    @property
    def headline(self) -> str:
        return self.narrative.headline


@dataclass
class FeedImportResult:
    """Result of importing an activity feed file"""
    filepath: str
    descriptions: List[ActivityDescription] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        return len(self.descriptions)

    @property
    def counts_by_type(self) -> Dict[TransactionType, int]:
        counts: Dict[TransactionType, int] = defaultdict(int)
        for description in self.descriptions:
            counts[description.type] += 1
        return dict(counts)

    def __str__(self) -> str:
        "Human-readable summary"
        lines = [
            f"Import summary:",
            f" 📄 File: {self.filepath}",
            f" ✅ Records: {self.total_records}",
        ]

        for transaction_type, count in self.counts_by_type.items():
            lines.append(f"   • {transaction_type.value}: {count}")

        return "\n".join(lines)


@dataclass
class FeedSummary:
    """
    Money in and out of a set of described records.

    Amounts that can't be read as numbers are left out of the totals.
    """
    money_out: List[ActivityDescription] = field(default_factory=list)
    money_in: List[ActivityDescription] = field(default_factory=list)

    @property
    def total_out(self) -> Decimal:
        """Total amount leaving the account (positive)"""
        return sum((-_amount(d) for d in self.money_out), Decimal("0"))

    @property
    def total_in(self) -> Decimal:
        """Total amount coming in"""
        return sum((_amount(d) for d in self.money_in), Decimal("0"))

    @property
    def net_flow(self) -> Decimal:
        return self.total_in - self.total_out

    @property
    def total_records(self) -> int:
        return len(self.money_out) + len(self.money_in)

    @property
    def spending_by_category(self) -> Dict[str, Decimal]:
        """Outgoing totals by category name"""
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        for description in self.money_out:
            totals[description.category.name] += -_amount(description)
        return dict(totals)

    @property
    def top_spending_categories(self) -> List[Tuple[str, Decimal]]:
        """Categories sorted by spending amount (descending)"""
        return sorted(
            self.spending_by_category.items(),
            key=lambda x: x[1],
            reverse=True
        )

    def __str__(self) -> str:
        lines = [
            f"📊 Activity Summary",
            f"",
            f"Records: {self.total_records}",
            f"  💸 Out: {self.total_out:,.2f} ({len(self.money_out)} records)",
            f"  💰 In:  {self.total_in:,.2f} ({len(self.money_in)} records)",
            f"  {'📈' if self.net_flow >= 0 else '📉'} Net: {self.net_flow:,.2f}",
        ]

        if self.spending_by_category:
            lines.append(f"\nTop Spending Categories:")
            for category, amount in self.top_spending_categories[:5]:
                lines.append(f"  • {category}: {amount:,.2f}")

        return "\n".join(lines)


def _amount(description: ActivityDescription) -> Decimal:
    try:
        return description.record.signed_amount
    except ValueError:
        return Decimal("0")
