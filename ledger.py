import logging

from models import Payment

logger = logging.getLogger(__name__)


def add_payment(store, student_id, amount, next_due_date, notes=None):
    """Record a payment against a student and move their due date.

    Returns the updated student, or None when ``student_id`` is unknown (in
    which case nothing is written). The new due date is taken as given: no
    date arithmetic and no check that it is later than the current one.
    """
    student = store.get(student_id)
    if student is None:
        logger.warning("Payment rejected: student %s not found", student_id)
        return None

    payment = Payment(amount=amount, notes=notes or None)
    updated = student.model_copy(update={
        'next_due_date': next_due_date,
        'payments': [*student.payments, payment],
    })
    store.save(updated)

    logger.info("Recorded payment %s of %s for student %s", payment.id, amount, student_id)
    return updated
