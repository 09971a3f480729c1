"""
Order Session API Endpoints.

Stateless checkout sessions: the checkout page creates a signed token for
the buyer's selection, and the page the buyer lands on after payment
verifies it.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from pydantic import ValidationError

from app.models.order import OrderIntent
from app.modules.checkout.service import (
    OrderSessionService,
    get_order_session_service,
)

router = APIRouter()

INVALID_TOKEN_DETAIL = "Invalid or expired token"

REQUIRED_INTENT_ERRORS = {"missing"}


async def _read_json_object(request: Request) -> dict[str, Any] | None:
    """Parse request body as a JSON object, None if it is anything else."""
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _serialize_intent(intent: OrderIntent) -> dict[str, Any]:
    """Render order intent for clients with numeric money fields."""
    data = intent.model_dump(mode="json")
    variant = intent.variant
    data["variant"].update(
        {
            "price": float(variant.price),
            "original_price": float(variant.original_price)
            if variant.original_price is not None
            else None,
            "discount_percentage": float(variant.discount_percentage),
        }
    )
    return data


@router.post("/create-session")
async def create_session(
    request: Request,
    sessions: OrderSessionService = Depends(get_order_session_service),
) -> dict[str, Any]:
    """
    Create a signed order session for the checkout flow.

    Returns token to carry through the payment redirect.
    """
    body = await _read_json_object(request)
    if body is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    body.pop("schema_version", None)

    has_product = body.get("product") or (
        body.get("platform") and body.get("product_type")
    )
    if not has_product or not body.get("variant"):
        raise HTTPException(status_code=400, detail="Missing required fields")

    try:
        intent = OrderIntent.model_validate(body)
    except ValidationError as e:
        if {err["type"] for err in e.errors()} & REQUIRED_INTENT_ERRORS:
            raise HTTPException(status_code=400, detail="Missing required fields")
        raise HTTPException(status_code=400, detail="Invalid order details")

    try:
        token = sessions.issue_order_token(intent)
    except Exception:
        logger.exception("Error creating order session")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {
        "success": True,
        "token": token,
        "expires_in": sessions.default_ttl_seconds,
        "message": "Order session created successfully",
    }


@router.post("/verify-session")
async def verify_session(
    request: Request,
    sessions: OrderSessionService = Depends(get_order_session_service),
) -> dict[str, Any]:
    """
    Verify an order session token.

    All rejection reasons share one response so clients cannot tell
    malformed, tampered and expired tokens apart.
    """
    body = await _read_json_object(request)
    token = body.get("token") if body else None

    if not token or not isinstance(token, str):
        raise HTTPException(status_code=400, detail="Token is required")

    try:
        intent = sessions.verify_order_token(token)
    except Exception:
        logger.exception("Error verifying order session")
        raise HTTPException(status_code=500, detail="Internal server error")

    if intent is None:
        raise HTTPException(status_code=401, detail=INVALID_TOKEN_DETAIL)

    return {
        "success": True,
        "data": _serialize_intent(intent),
        "message": "Token verified successfully",
    }
