import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from portfolio_api.api.deps import get_store
from portfolio_api.core.errors import DependencyError, NotFoundError
from portfolio_api.db.mongo import MongoStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/education", status_code=status.HTTP_200_OK)
async def list_education(store: MongoStore = Depends(get_store)) -> Dict[str, Any]:
    """Return all education records in the order the store yields them."""
    try:
        records = await store.list_education()
    except Exception as e:
        raise DependencyError("Error fetching education", reason=f"Error fetching education: {str(e)}") from e

    if not records:
        raise NotFoundError("No education records found")

    return {
        "success": True,
        "data": [record.model_dump() for record in records],
    }
