"""
Shapes summary aggregates into the series the dashboard charts plot.
"""
from typing import Dict, List

from finance_tracker.categories import category_color
from finance_tracker.models import TRANSACTION_TYPE_EXPENSE

TOP_CATEGORIES_LIMIT = 6


def expense_breakdown(summary: Dict) -> List[Dict]:
    """Pie chart series: one slice per expense category, in summary order."""
    return [
        {
            "name": row["category"],
            "value": row["total"],
            "color": category_color(row["category"]),
        }
        for row in summary["by_category"]
        if row["transaction_type"] == TRANSACTION_TYPE_EXPENSE
    ]


def top_categories(summary: Dict, limit: int = TOP_CATEGORIES_LIMIT) -> List[Dict]:
    """
    Bar chart series: the largest category totals of either type.
    Income and expense rows for the same category are separate bars.
    """
    bars = [
        {
            "name": row["category"],
            "amount": row["total"],
            "transaction_type": row["transaction_type"],
        }
        for row in summary["by_category"]
    ]
    # sorted() is stable, so equal amounts keep the summary order
    bars = sorted(bars, key=lambda bar: bar["amount"], reverse=True)
    return bars[:max(0, limit)]
