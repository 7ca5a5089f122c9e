"""
Backup, restore and spreadsheet export of the student collection.
"""
import json
import logging
from datetime import date
from typing import NamedTuple, Optional

from pydantic import ValidationError

from fee_status import calculate_status, total_paid
from models import StudentList, as_date, dump_students

logger = logging.getLogger(__name__)

CSV_HEADER = 'ID,Name,Father Name,Course,Fee Type,Cycle Amount,Contact,Address,Enrollment Date,Total Paid,Status'


class RestoreResult(NamedTuple):
    ok: bool
    count: int = 0
    error: Optional[str] = None


def backup_filename(today=None):
    return f"ScholarFlow_Backup_{(today or date.today()).isoformat()}.json"


def csv_filename(today=None):
    return f"ScholarFlow_Export_{(today or date.today()).isoformat()}.csv"


def export_backup(store):
    """Full snapshot of the collection, in the same shape the slot keeps it"""
    return dump_students(store.get_all(), indent=2)


def _quote(value):
    return '"%s"' % (value or '').replace('"', '""')


def _cell(value):
    """Plain value, quoted only when it would break the row"""
    if any(c in value for c in ',"\r\n'):
        return _quote(value)
    return value


def _number(value):
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def export_csv(store, today=None):
    """One row per student; returns None when there is nothing to export"""
    students = store.get_all()
    if not students:
        return None

    rows = [CSV_HEADER]
    for s in students:
        rows.append(','.join([
            _cell(s.id),
            _quote(s.name),
            _quote(s.father_name),
            _quote(s.course),
            s.fee_frequency.value,
            _number(s.monthly_fee),
            _quote(s.contact_number),
            _quote(s.address),
            as_date(s.enrollment_date).isoformat(),
            _number(total_paid(s)),
            calculate_status(s.next_due_date, today).value,
        ]))
    return '\n'.join(rows)


def parse_backup(content):
    """Validate backup file content into a list of students.

    Raises ValueError with a user-facing message when the file is not a list
    of student records with an id and a name.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise ValueError("Error parsing backup file.")

    try:
        data = json.loads(content)
    except ValueError:
        raise ValueError("Error parsing backup file.")

    if not isinstance(data, list):
        raise ValueError("Invalid file format.")

    if not all(isinstance(item, dict) and item.get('id') and item.get('name') for item in data):
        raise ValueError("Invalid backup file structure.")

    try:
        students = StudentList.validate_python(data)
    except ValidationError as e:
        logger.info("Backup failed schema validation: %s", e)
        raise ValueError("Invalid backup file structure.")

    ids = [s.id for s in students]
    if len(set(ids)) != len(ids):
        raise ValueError("Backup contains duplicate student ids.")

    return students


def restore_backup(store, content):
    """Replace the whole collection with a backup file's content.

    This is a destructive overwrite, not a merge; on any failure the store
    is left as it was.
    """
    try:
        students = parse_backup(content)
    except ValueError as e:
        logger.warning("Restore rejected: %s", e)
        return RestoreResult(ok=False, error=str(e))

    store.replace_all(students)
    logger.info("Restored %d students from backup", len(students))
    return RestoreResult(ok=True, count=len(students))
