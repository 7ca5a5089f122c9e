import uuid
from datetime import datetime, time, timezone
from enum import Enum
from typing import List, Optional

from flask_sqlalchemy import SQLAlchemy
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

db = SQLAlchemy()


def utcnow():
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid.uuid4())


def as_due_datetime(value):
    """Turn a calendar date from a form into a due timestamp at midnight UTC"""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def as_date(value):
    """Calendar date portion of a stored timestamp"""
    if isinstance(value, datetime):
        return value.date()
    return value


# Database Models
class StorageSlot(db.Model):
    """Named slot holding one serialized collection"""
    __tablename__ = 'storage_slot'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


# Record schemas (camelCase on the wire, as stored in the slot and in backups)
class FeeStatus(str, Enum):
    PAID = 'Paid'
    PENDING = 'Pending'
    OVERDUE = 'Overdue'


class FeeFrequency(str, Enum):
    MONTHLY = 'Monthly'
    ANNUALLY = 'Annually'
    ONE_TIME = 'OneTime'
    INSTALLMENT = 'Installment'


class Record(BaseModel):
    # Non-finite amounts cannot be written back as JSON numbers
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    def to_json(self):
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class Payment(Record):
    id: str = Field(default_factory=new_id, min_length=1)
    amount: float = Field(gt=0)
    date: datetime = Field(default_factory=utcnow)
    notes: Optional[str] = None


class Student(Record):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    father_name: Optional[str] = None
    photo: Optional[str] = None
    address: str = ''
    contact_number: str = ''
    course: str = ''

    # Fee configuration
    fee_frequency: FeeFrequency = FeeFrequency.MONTHLY
    monthly_fee: float = Field(ge=0)  # amount per cycle (month/year/installment)
    total_installments: Optional[int] = Field(default=None, ge=0)

    enrollment_date: datetime
    next_due_date: datetime
    payments: List[Payment] = Field(default_factory=list)


class DashboardStats(Record):
    total_students: int = 0
    total_collected: float = 0
    pending_amount: float = 0
    overdue_count: int = 0


StudentList = TypeAdapter(List[Student])


def dump_students(students, indent=None):
    """Serialize a collection the way it is kept in the slot"""
    return StudentList.dump_json(
        list(students), by_alias=True, exclude_none=True, indent=indent
    ).decode('utf-8')


def load_students(payload):
    """Parse and validate a serialized collection; raises pydantic.ValidationError"""
    return StudentList.validate_json(payload)
