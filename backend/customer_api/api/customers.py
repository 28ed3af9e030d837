"""
Customer API endpoints.
"""
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Any, Dict
from customer_api.db.database import get_db
from customer_api.services import customer_handlers
from customer_api.services.customer_handlers import HandlerResponse

router = APIRouter()


def _as_object(payload: Any) -> Dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


def _to_response(result: HandlerResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.post("/")
async def create_customer(
    payload: Any = Body(None),
    db: Session = Depends(get_db)
):
    """Create a new customer."""
    result = await customer_handlers.create_customer(db, _as_object(payload))
    return _to_response(result)


@router.get("/{customer_id}")
async def get_customer(
    customer_id: str,
    db: Session = Depends(get_db)
):
    """Get a specific customer."""
    result = await customer_handlers.get_customer(db, customer_id)
    return _to_response(result)


@router.patch("/{customer_id}")
@router.put("/{customer_id}")
async def update_customer(
    customer_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db)
):
    """Update a customer's name and/or contact details."""
    result = await customer_handlers.update_customer(db, customer_id, _as_object(payload))
    return _to_response(result)
