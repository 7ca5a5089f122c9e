"""
Fee status and financial aggregation.

Everything here is a pure read over a student collection: status is derived
from ``next_due_date`` on every call and never stored, and the dashboard
numbers are recomputed from scratch each time they are asked for.
"""
import math
from datetime import date

from dateutil.relativedelta import relativedelta

from models import DashboardStats, FeeFrequency, FeeStatus, as_date

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


def calculate_status(next_due_date, today=None):
    """Overdue once today is strictly past the due date, Pending otherwise.

    Comparison is by calendar day, so a payment due today is never overdue.
    ``Paid`` is never produced here.
    """
    today = today or date.today()
    if today > as_date(next_due_date):
        return FeeStatus.OVERDUE
    return FeeStatus.PENDING


def is_overdue(student, today=None):
    return calculate_status(student.next_due_date, today) is FeeStatus.OVERDUE


def total_paid(student):
    """Lifetime amount paid by one student"""
    return math.fsum(p.amount for p in student.payments)


def last_payment(student):
    """Most recently recorded payment, or None"""
    return student.payments[-1] if student.payments else None


def get_dashboard_stats(students, today=None):
    """Totals shown on the dashboard.

    ``pending_amount`` counts one cycle's fee per overdue student; it is not
    an arrears balance across several missed cycles.
    """
    today = today or date.today()
    overdue = [s for s in students if is_overdue(s, today)]

    return DashboardStats(
        total_students=len(students),
        total_collected=math.fsum(p.amount for s in students for p in s.payments),
        pending_amount=math.fsum(s.monthly_fee for s in overdue),
        overdue_count=len(overdue),
    )


def overdue_students(students, today=None):
    return [s for s in students if is_overdue(s, today)]


def status_breakdown(students, today=None):
    """Active vs overdue head count for the status chart"""
    overdue_count = len(overdue_students(students, today))
    return {
        'Active': len(students) - overdue_count,
        'Overdue': overdue_count,
    }


def monthly_collections(students, year=None):
    """Amount collected per calendar month of ``year``"""
    year = year or date.today().year
    buckets = [0.0] * 12
    for student in students:
        for payment in student.payments:
            if payment.date.year == year:
                buckets[payment.date.month - 1] += payment.amount
    return [{'name': name, 'amount': amount} for name, amount in zip(MONTH_NAMES, buckets)]


def filter_students(students, search='', overdue_only=False, today=None):
    """Search by name, course or contact number, optionally only overdue ones"""
    term = (search or '').strip()
    lowered = term.lower()

    matches = []
    for student in students:
        if term and not (
            lowered in student.name.lower()
            or lowered in student.course.lower()
            or term in student.contact_number
        ):
            continue
        if overdue_only and not is_overdue(student, today):
            continue
        matches.append(student)
    return matches


def propose_next_due_date(fee_frequency, from_date=None):
    """Due date suggested when a payment is recorded.

    One year ahead for annual fees, one calendar month ahead for everything
    else. Month arithmetic clamps to the last day of a shorter month.
    """
    from_date = as_date(from_date) if from_date else date.today()
    if FeeFrequency(fee_frequency) is FeeFrequency.ANNUALLY:
        return from_date + relativedelta(years=1)
    return from_date + relativedelta(months=1)
