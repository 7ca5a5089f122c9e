import logging

from pydantic import ValidationError

from config import DEFAULT_STORAGE_KEY
from models import StorageSlot, db, dump_students, load_students

logger = logging.getLogger(__name__)


class RecordStore:
    """Whole-collection persistence of students in a single named slot.

    Every call reads the full collection, changes it in memory and writes the
    full collection back. There is no locking: concurrent writers race and
    the last one wins.
    """

    def __init__(self, slot_key=DEFAULT_STORAGE_KEY):
        self.slot_key = slot_key

    def read_raw(self):
        """Serialized payload currently held in the slot, or None"""
        return db.session.execute(
            db.select(StorageSlot.value).where(StorageSlot.key == self.slot_key)
        ).scalar()

    def _write(self, students):
        payload = dump_students(students)
        slot = db.session.get(StorageSlot, self.slot_key)
        if slot is None:
            slot = StorageSlot(key=self.slot_key, value=payload)
            db.session.add(slot)
        else:
            slot.value = payload
        db.session.commit()
        logger.debug("Wrote %d students to slot %s", len(students), self.slot_key)

    def get_all(self):
        raw = self.read_raw()
        if not raw:
            return []
        try:
            return load_students(raw)
        except ValidationError as e:
            # Unreadable slot content is treated as an empty collection
            logger.warning("Ignoring invalid payload in slot %s: %s", self.slot_key, e)
            return []

    def get(self, student_id):
        for student in self.get_all():
            if student.id == student_id:
                return student
        return None

    def save(self, student):
        """Insert or replace by id"""
        students = self.get_all()
        for index, existing in enumerate(students):
            if existing.id == student.id:
                students[index] = student
                break
        else:
            students.append(student)
        self._write(students)
        return student

    def delete(self, student_id):
        """Remove a student and its payments; returns False if the id is unknown"""
        students = self.get_all()
        remaining = [s for s in students if s.id != student_id]
        if len(remaining) == len(students):
            return False
        self._write(remaining)
        logger.info("Deleted student %s", student_id)
        return True

    def replace_all(self, students):
        """Overwrite the whole collection"""
        self._write(list(students))
