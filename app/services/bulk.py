"""
Partial-failure batch runner shared by the bulk DTR endpoints.

Each id is handled independently by the single-item operation; failures are
collected instead of aborting the batch. Items already committed stay
committed, there is no rollback across the batch.
"""
import logging
from typing import Any, Callable, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import AppException

logger = logging.getLogger(__name__)


def run_bulk(db: Session, ids: List[int], operation: Callable[[int], Any]) -> Dict[str, Any]:
    results: List[Any] = []
    errors: List[Dict[str, Any]] = []

    for item_id in ids:
        try:
            results.append(operation(item_id))
        except AppException as e:
            errors.append({"id": item_id, "message": e.message})
        except Exception:
            db.rollback()
            logger.exception(f"Bulk item {item_id} failed")
            errors.append({"id": item_id, "message": "Failed to process"})

    return {
        "success": True,
        "processed": len(results),
        "total": len(ids),
        "results": results,
        "errors": errors,
    }
