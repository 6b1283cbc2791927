# models.py
# Role: SQLAlchemy ORM models for the FinanceiroX domain.
#       Users, income/expense transactions, and the per-user labels
#       (income sources / expense categories) used to group them.

import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Numeric,
    Text,
    UniqueConstraint,
)
from db import Base

INCOME = "INCOME"
EXPENSE = "EXPENSE"
TRANSACTION_TYPES = (INCOME, EXPENSE)

# Type-specific field-sets; the one not matching the type stays NULL
INCOME_FIELDS = ("income_source", "receipt_method", "receipt_detail")
EXPENSE_FIELDS = ("expense_category", "pay_method", "pay_app")


def _new_id() -> str:
    return str(uuid.uuid4())


def _iso(value):
    return value.isoformat() if value is not None else None


class User(Base):
    """
    A registered account. Transactions and labels are scoped by the user's
    email rather than by a foreign key.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)

    # Free text, e.g. "Uber", "Amazon Flex"
    job_type = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "jobType": self.job_type,
        }


class Transaction(Base):
    """
    ORM model representing a single income or expense entry.

    `type` decides which field-set is populated: income rows carry
    income_source / receipt_method / receipt_detail, expense rows carry
    expense_category / pay_method / pay_app. Amounts are always positive JPY.
    """

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_email = Column(String, nullable=False, index=True)

    # "INCOME" | "EXPENSE"
    type = Column(String(7), nullable=False, index=True)

    amount = Column(Numeric(14, 2), nullable=False)
    occurred_at = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # Income
    income_source = Column(String, nullable=True)
    receipt_method = Column(String, nullable=True)
    receipt_detail = Column(String, nullable=True)

    # Expense
    expense_category = Column(String, nullable=True)
    pay_method = Column(String, nullable=True)
    pay_app = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userEmail": self.user_email,
            "type": self.type,
            "amount": float(self.amount) if self.amount is not None else 0.0,
            "occurredAt": _iso(self.occurred_at),
            "notes": self.notes,
            "incomeSource": self.income_source,
            "receiptMethod": self.receipt_method,
            "receiptDetail": self.receipt_detail,
            "expenseCategory": self.expense_category,
            "payMethod": self.pay_method,
            "payApp": self.pay_app,
            "createdAt": _iso(self.created_at),
        }


class IncomeSource(Base):
    """
    User-defined origin of income (an app, an employer...).

    payment_weekday / work_week_* use 0=Sunday .. 6=Saturday and drive the
    "already received vs. to be received" balance split.
    """

    __tablename__ = "income_sources"
    __table_args__ = (UniqueConstraint("user_email", "name", name="uq_income_source_name"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    user_email = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    payment_weekday = Column(Integer, nullable=True)
    work_week_start = Column(Integer, nullable=True)
    work_week_end = Column(Integer, nullable=True)
    icon_url = Column(String, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userEmail": self.user_email,
            "name": self.name,
            "color": self.color,
            "paymentWeekday": self.payment_weekday,
            "workWeekStart": self.work_week_start,
            "workWeekEnd": self.work_week_end,
            "iconUrl": self.icon_url,
        }


class ExpenseCategory(Base):
    __tablename__ = "expense_categories"
    __table_args__ = (UniqueConstraint("user_email", "name", name="uq_expense_category_name"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    user_email = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    icon_url = Column(String, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userEmail": self.user_email,
            "name": self.name,
            "color": self.color,
            "iconUrl": self.icon_url,
        }
