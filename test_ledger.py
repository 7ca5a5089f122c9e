from datetime import datetime, timedelta, timezone

from conftest import make_payment, make_student
from ledger import add_payment


def test_add_payment_to_unknown_student_writes_nothing(store):
    store.save(make_student('a', payments=[make_payment(100)]))
    before = store.read_raw()

    result = add_payment(store, 'missing', 500, datetime(2026, 11, 18, tzinfo=timezone.utc))

    assert result is None
    assert store.read_raw() == before
    students = store.get_all()
    assert len(students) == 1
    assert [p.amount for p in students[0].payments] == [100]


def test_add_payment_appends_one_payment_and_moves_due_date(store):
    original = make_student('a', payments=[make_payment(100, payment_id='p-1')])
    store.save(original)
    store.save(make_student('b'))
    new_due = datetime(2026, 11, 18, tzinfo=timezone.utc)

    before = datetime.now(timezone.utc)
    updated = add_payment(store, 'a', 500, new_due, notes='October fee')
    after = datetime.now(timezone.utc)

    assert updated.next_due_date == new_due
    assert len(updated.payments) == 2
    assert updated.payments[0] == original.payments[0]

    payment = updated.payments[-1]
    assert payment.amount == 500
    assert payment.notes == 'October fee'
    assert payment.id and payment.id != 'p-1'
    assert before <= payment.date <= after

    # everything else is untouched
    unchanged = original.model_dump(exclude={'next_due_date', 'payments'})
    assert updated.model_dump(exclude={'next_due_date', 'payments'}) == unchanged

    assert store.get('a') == updated
    assert store.get('b').payments == []


def test_add_payment_accepts_earlier_due_date(store):
    student = make_student('a')
    store.save(student)
    earlier = student.next_due_date - timedelta(days=60)

    updated = add_payment(store, 'a', 50, earlier)

    assert updated.next_due_date == earlier


def test_payment_ids_are_unique(store):
    store.save(make_student('a'))
    due = datetime(2026, 11, 18, tzinfo=timezone.utc)

    add_payment(store, 'a', 10, due)
    updated = add_payment(store, 'a', 20, due)

    ids = [p.id for p in updated.payments]
    assert len(set(ids)) == 2
    assert [p.amount for p in updated.payments] == [10, 20]
