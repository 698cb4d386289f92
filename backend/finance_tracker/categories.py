"""
Category catalog offered to clients when recording transactions.
Transactions may still carry any non-empty category name.
"""

EXPENSE_CATEGORIES = [
    "Food",
    "Transport",
    "Entertainment",
    "Health",
    "Clothing",
    "Education",
    "Rent",
    "Utilities",
    "Investment",
    "Other",
]

INCOME_CATEGORIES = ["Salary", "Freelance", "Investment", "Gift", "Other"]

CATEGORY_COLORS = {
    "Food": "#ff7b00",
    "Transport": "#3a86ff",
    "Entertainment": "#f15bb5",
    "Health": "#e63946",
    "Clothing": "#9b5de5",
    "Education": "#4361ee",
    "Rent": "#f4a261",
    "Utilities": "#7209b7",
    "Investment": "#4cc9f0",
    "Other": "#adb5bd",
}

DEFAULT_CATEGORY_COLOR = "#8884d8"


def category_color(name: str) -> str:
    return CATEGORY_COLORS.get(name, DEFAULT_CATEGORY_COLOR)
