"""Request schemas for the payment API."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.validation import eth_to_wei, parse_positive_amount


class CreatePaymentRequest(BaseModel):
    """Body of POST /payment/create."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    order_id: str = Field(alias="orderId", min_length=1)
    amount: str = Field(min_length=1, description="Expected amount in ETH")

    @field_validator("order_id", mode="before")
    @classmethod
    def coerce_order_id(cls, v: object) -> object:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: object) -> str:
        amount = parse_positive_amount(v)
        if amount is None:
            raise ValueError("Invalid amount")
        try:
            amount_wei = eth_to_wei(amount)
        except ValueError as e:
            raise ValueError("Invalid amount") from e
        if amount_wei <= 0:
            # below 1 wei
            raise ValueError("Invalid amount")
        # Keep the caller's notation for strings, normalise numbers
        return v.strip() if isinstance(v, str) else _format_decimal(amount)


def _format_decimal(amount: Decimal) -> str:
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
