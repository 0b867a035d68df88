# dashboard/actions/results.py

from typing import Literal, Optional, Union

from pydantic import BaseModel

from dashboard.models.invoices import FieldErrors, State


class Success(BaseModel):
    kind: Literal["success"] = "success"
    invoice_id: Optional[str] = None

    def to_state(self) -> State:
        return State()


class ValidationFailure(BaseModel):
    kind: Literal["validation_failure"] = "validation_failure"
    errors: FieldErrors
    message: str

    def to_state(self) -> State:
        return State(errors=self.errors, message=self.message)


class PersistenceFailure(BaseModel):
    kind: Literal["persistence_failure"] = "persistence_failure"
    message: str

    def to_state(self) -> State:
        return State(message=self.message)


ActionResult = Union[Success, ValidationFailure, PersistenceFailure]
