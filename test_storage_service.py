import json

import pytest
from pydantic import ValidationError

from conftest import make_payment, make_student
from models import StorageSlot, db
from storage_service import RecordStore


def test_empty_slot_reads_as_empty_collection(store):
    assert store.read_raw() is None
    assert store.get_all() == []


def test_save_appends_then_replaces_by_id(store):
    asha = make_student('a', name='Asha')
    john = make_student('j', name='John')
    store.save(asha)
    store.save(john)

    renamed = asha.model_copy(update={'name': 'Asha M.'})
    store.save(renamed)

    students = store.get_all()
    assert [s.id for s in students] == ['a', 'j']
    assert students[0].name == 'Asha M.'


def test_get_returns_none_for_unknown_id(store):
    store.save(make_student('a'))
    assert store.get('a').id == 'a'
    assert store.get('missing') is None


def test_delete_removes_student_and_payments(store):
    store.save(make_student('a', payments=[make_payment(100)]))
    store.save(make_student('b'))

    assert store.delete('a') is True
    assert [s.id for s in store.get_all()] == ['b']
    assert store.get('a') is None
    assert store.delete('a') is False


def test_slot_holds_camel_case_json(store):
    store.save(make_student('a', payments=[make_payment(250)]))

    data = json.loads(store.read_raw())

    assert isinstance(data, list)
    record = data[0]
    assert record['id'] == 'a'
    assert record['fatherName'] == 'Raj Mehra'
    assert record['contactNumber'] == '9876543210'
    assert record['feeFrequency'] == 'Monthly'
    assert record['monthlyFee'] == 500
    assert record['nextDueDate'].startswith('2026-10-18T00:00:00')
    assert record['payments'][0]['amount'] == 250
    assert 'photo' not in record


def test_corrupt_slot_reads_as_empty_collection(store):
    db.session.add(StorageSlot(key=store.slot_key, value='{not json'))
    db.session.commit()

    assert store.get_all() == []


def test_wrongly_shaped_slot_reads_as_empty_collection(store):
    db.session.add(StorageSlot(key=store.slot_key, value=json.dumps({'id': 'a'})))
    db.session.commit()

    assert store.get_all() == []

    # the next write starts over from an empty collection
    store.save(make_student('b'))
    assert [s.id for s in store.get_all()] == ['b']


def test_slots_are_independent(store):
    other = RecordStore('scholarflow_data_v1')
    store.save(make_student('a'))

    assert other.get_all() == []


def test_replace_all_overwrites_collection(store):
    store.save(make_student('a'))
    store.replace_all([make_student('x'), make_student('y')])

    assert [s.id for s in store.get_all()] == ['x', 'y']


@pytest.mark.parametrize('amount', [float('inf'), float('nan')])
def test_non_finite_amounts_never_reach_the_slot(store, amount):
    store.save(make_student('a'))

    with pytest.raises(ValidationError):
        make_student('b', fee=amount)
    with pytest.raises(ValidationError):
        make_payment(amount)

    assert [s.id for s in store.get_all()] == ['a']


def test_slot_records_when_it_was_written(store):
    store.save(make_student('a'))
    first = db.session.get(StorageSlot, store.slot_key).updated_at

    store.save(make_student('b'))
    second = db.session.get(StorageSlot, store.slot_key).updated_at

    assert first is not None
    assert second >= first
