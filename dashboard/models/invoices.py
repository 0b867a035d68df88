# dashboard/models/invoices.py

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

CUSTOMER_ERROR = "Please select a customer."
AMOUNT_ERROR = "Please enter an amount greater than $0."
STATUS_ERROR = "Please select an invoice status."

# Largest value the INTEGER amount column holds, in cents and in dollars
MAX_AMOUNT_CENTS = 2**31 - 1
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100

InvoiceStatus = Literal["pending", "paid"]
FieldErrors = Dict[str, List[str]]


def _to_cents(amount: Decimal) -> int:
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """
    Shape of a submitted invoice form. `id` and `date` are never read
    from the form: the id comes from the route, the date from the server.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: str = Field(default=None, alias="customerId", validate_default=True)
    amount: Decimal = Field(default=None, validate_default=True)
    status: InvoiceStatus = Field(default=None, validate_default=True)

    @field_validator("customer_id", mode="before")
    @classmethod
    def _customer_selected(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_missing", CUSTOMER_ERROR)
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_positive(cls, value: Any) -> Decimal:
        if isinstance(value, bool) or value is None:
            raise PydanticCustomError("amount_invalid", AMOUNT_ERROR)
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise PydanticCustomError("amount_invalid", AMOUNT_ERROR)
        if not amount.is_finite() or amount <= 0 or amount > MAX_AMOUNT:
            raise PydanticCustomError("amount_invalid", AMOUNT_ERROR)
        # Sub-cent amounts round to zero cents
        if _to_cents(amount) < 1:
            raise PydanticCustomError("amount_invalid", AMOUNT_ERROR)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def _status_known(cls, value: Any) -> str:
        if value not in ("pending", "paid"):
            raise PydanticCustomError("status_invalid", STATUS_ERROR)
        return value

    @property
    def amount_in_cents(self) -> int:
        return _to_cents(self.amount)


def validate_invoice_form(
    form_data: Mapping[str, Optional[str]],
) -> Tuple[Optional[InvoiceForm], Optional[FieldErrors]]:
    """
    Validate raw form values. Returns (form, None) on success and
    (None, field_errors) otherwise; never raises for bad input.
    """
    try:
        return InvoiceForm.model_validate(dict(form_data)), None
    except ValidationError as exc:
        errors: FieldErrors = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "__root__"
            errors.setdefault(field, []).append(err["msg"])
        return None, errors


class State(BaseModel):
    errors: Optional[FieldErrors] = None
    message: Optional[str] = None


class InvoiceOut(BaseModel):
    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: date

    model_config = ConfigDict(from_attributes=True)
