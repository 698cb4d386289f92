from fastapi import APIRouter

from finance_tracker.categories import CATEGORY_COLORS, EXPENSE_CATEGORIES, INCOME_CATEGORIES
from finance_tracker.schemas import CategoryCatalogResponse

router = APIRouter()


@router.get("", response_model=CategoryCatalogResponse)
def list_categories():
    """List the suggested expense and income categories."""
    return CategoryCatalogResponse(
        expense=EXPENSE_CATEGORIES,
        income=INCOME_CATEGORIES,
        colors=CATEGORY_COLORS,
    )
