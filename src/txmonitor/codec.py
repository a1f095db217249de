"""Transaction model and its JSON wire encoding."""

from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

U32_MAX = 2**32 - 1


class DecodeError(ValueError):
    """The request body is not a well-formed transaction document."""


class Transaction(BaseModel):
    """A single financial transaction record.

    Values are frozen once built; ``metadata`` is an opaque JSON object kept
    exactly as the client sent it.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    transaction_id: str
    user_id: int = Field(..., ge=0, le=U32_MAX)
    amount: float = Field(..., allow_inf_nan=False)
    currency: str
    metadata: Dict[str, Any]
    timestamp: str


def decode(body: Union[bytes, str]) -> Transaction:
    """Parse a JSON document into a ``Transaction``; all fields or nothing."""
    try:
        return Transaction.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"Invalid transaction: {exc.error_count()} error(s)") from exc


def encode(tx: Transaction) -> bytes:
    return tx.model_dump_json().encode("utf-8")
