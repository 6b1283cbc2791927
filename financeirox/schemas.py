# financeirox/schemas.py
"""
Request bodies for the JSON API.

Every field is optional on purpose: the handlers validate presence and
format themselves so they can answer with the user-facing messages
(see financeirox/services/). camelCase aliases match the client payloads.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def provided(self) -> dict:
        """Only the fields the client actually sent, keyed by their alias."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class LoginRequest(_Body):
    email: Optional[str] = None
    password: Optional[str] = None


class SignupRequest(_Body):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword")
    job_type: Optional[str] = Field(default=None, alias="jobType")


class SourceIn(_Body):
    id: Optional[str] = None
    kind: Optional[str] = None
    name: Optional[str] = None
    color: Optional[str] = None
    payment_weekday: Any = Field(default=None, alias="paymentWeekday")
    work_week_start: Any = Field(default=None, alias="workWeekStart")
    work_week_end: Any = Field(default=None, alias="workWeekEnd")
    icon_url: Optional[str] = Field(default=None, alias="iconUrl")


class TransactionIn(_Body):
    type: Optional[str] = None
    amount: Any = None
    occurred_at: Any = Field(default=None, alias="occurredAt")
    notes: Any = None

    income_source: Any = Field(default=None, alias="incomeSource")
    receipt_method: Any = Field(default=None, alias="receiptMethod")
    receipt_detail: Any = Field(default=None, alias="receiptDetail")

    expense_category: Any = Field(default=None, alias="expenseCategory")
    pay_method: Any = Field(default=None, alias="payMethod")
    pay_app: Any = Field(default=None, alias="payApp")
