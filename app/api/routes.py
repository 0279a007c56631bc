"""
Payment API handlers.

Thin pass-throughs to the payment ledger. Input validation happens here;
responses are built from public payment views only.
"""

from aiohttp import web
from loguru import logger
from pydantic import ValidationError

from app.api.keys import LEDGER_KEY
from app.api.schemas import CreatePaymentRequest


def _error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def create_payment(request: web.Request) -> web.Response:
    """POST /payment/create {amount, orderId}"""
    try:
        body = await request.json()
    except ValueError:
        return _error("Amount and orderId are required", 400)

    if not isinstance(body, dict) or not body.get("amount") or not body.get("orderId"):
        return _error("Amount and orderId are required", 400)

    try:
        payload = CreatePaymentRequest.model_validate(body)
    except ValidationError as e:
        logger.debug(f"Rejected create request: {e.errors()}")
        if any(error["loc"][:1] == ("orderId",) for error in e.errors()):
            return _error("Amount and orderId are required", 400)
        return _error("Invalid amount", 400)

    try:
        receipt = request.app[LEDGER_KEY].create(payload.order_id, payload.amount)
    except Exception as e:
        logger.exception(f"Error creating payment: {e}")
        return _error("Internal server error", 500)

    return web.json_response({"success": True, "data": receipt.to_dict()})


async def get_payment_status(request: web.Request) -> web.Response:
    """GET /payment/{payment_id}/status"""
    payment_id = request.match_info["payment_id"]

    try:
        view = request.app[LEDGER_KEY].get_view(payment_id)
    except Exception as e:
        logger.exception(f"Error retrieving payment status: {e}")
        return _error("Internal server error", 500)

    if view is None:
        return _error("Payment not found", 404)

    return web.json_response({"success": True, "data": view.to_dict()})


async def list_payments(request: web.Request) -> web.Response:
    """GET /payments"""
    try:
        views = request.app[LEDGER_KEY].list_views()
    except Exception as e:
        logger.exception(f"Error retrieving payments: {e}")
        return _error("Internal server error", 500)

    return web.json_response(
        {"success": True, "data": [view.to_dict() for view in views]}
    )


def register_payment_routes(app: web.Application) -> None:
    app.router.add_post("/payment/create", create_payment)
    app.router.add_get("/payment/{payment_id}/status", get_payment_status)
    app.router.add_get("/payments", list_payments)
