from datetime import date, datetime, timezone

import pytest

from app import create_app
from config import TestingConfig
from models import FeeFrequency, Payment, Student
from storage_service import RecordStore

TODAY = date(2026, 10, 18)


def make_student(student_id='s1', name='Asha Mehra', due=TODAY, fee=500, payments=None, **extra):
    fields = dict(
        id=student_id,
        name=name,
        father_name='Raj Mehra',
        address='12 Park Road',
        contact_number='9876543210',
        course='B.Sc',
        fee_frequency=FeeFrequency.MONTHLY,
        monthly_fee=fee,
        enrollment_date=datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc),
        next_due_date=datetime(due.year, due.month, due.day, tzinfo=timezone.utc),
        payments=payments or [],
    )
    fields.update(extra)
    return Student(**fields)


def make_payment(amount, when=datetime(2026, 2, 3, 10, 0, tzinfo=timezone.utc), payment_id=None):
    payment = Payment(amount=amount, date=when)
    if payment_id:
        payment = payment.model_copy(update={'id': payment_id})
    return payment


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield RecordStore(app.config['STORAGE_KEY'])


@pytest.fixture
def seed(app):
    """Write students into the slot outside of any request"""
    def _seed(*students):
        with app.app_context():
            RecordStore(app.config['STORAGE_KEY']).replace_all(students)
    return _seed


@pytest.fixture
def stored(app):
    """Read the slot back outside of any request"""
    def _stored():
        with app.app_context():
            return RecordStore(app.config['STORAGE_KEY']).get_all()
    return _stored
