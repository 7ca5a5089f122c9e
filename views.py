import io
import logging
from datetime import date

from flask import Blueprint, current_app, jsonify, request, send_file
from flask_wtf.csrf import generate_csrf

from backup import backup_filename, csv_filename, export_backup, export_csv, restore_backup
from fee_status import (calculate_status, filter_students, get_dashboard_stats,
                        monthly_collections, overdue_students, propose_next_due_date,
                        status_breakdown, total_paid)
from forms import PaymentForm, RestoreForm, StudentForm
from insights import generate_financial_insight
from ledger import add_payment
from models import Student, as_due_datetime, new_id, utcnow
from storage_service import RecordStore

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


def get_store():
    return RecordStore(current_app.config['STORAGE_KEY'])


def student_json(student, today=None):
    data = student.to_json()
    data['status'] = calculate_status(student.next_due_date, today).value
    data['totalPaid'] = total_paid(student)
    return data


def not_found():
    return jsonify({'success': False, 'error': 'Student not found'}), 404


def invalid(form):
    return jsonify({'success': False, 'errors': form.errors}), 400


@main_bp.route('/api/csrf_token')
def csrf_token():
    return jsonify({'csrf_token': generate_csrf()})


# Students
@main_bp.route('/api/students')
def list_students():
    today = date.today()
    students = filter_students(
        get_store().get_all(),
        search=request.args.get('q', ''),
        overdue_only=request.args.get('filter') == 'overdue',
        today=today,
    )
    return jsonify({'students': [student_json(s, today) for s in students]})


@main_bp.route('/api/students/<student_id>')
def get_student(student_id):
    student = get_store().get(student_id)
    if student is None:
        return not_found()
    return jsonify(student_json(student))


@main_bp.route('/api/students', methods=['POST'])
def create_student():
    form = StudentForm()
    if not form.validate_on_submit():
        return invalid(form)

    student = Student(
        id=new_id(),
        enrollment_date=utcnow(),
        next_due_date=as_due_datetime(form.next_due_date.data),
        payments=[],
        **form.student_fields(),
    )
    get_store().save(student)
    logger.info("Added student %s (%s)", student.id, student.name)
    return jsonify({'success': True, 'student': student_json(student)}), 201


@main_bp.route('/api/students/<student_id>', methods=['POST', 'PUT'])
def edit_student(student_id):
    store = get_store()
    existing = store.get(student_id)
    if existing is None:
        return not_found()

    form = StudentForm()
    if not form.validate_on_submit():
        return invalid(form)

    # id, enrollment date and payment history are never touched by an edit
    fields = form.student_fields()
    fields['next_due_date'] = as_due_datetime(form.next_due_date.data)
    student = existing.model_copy(update=fields)
    store.save(student)
    return jsonify({'success': True, 'student': student_json(student)})


@main_bp.route('/api/students/<student_id>', methods=['DELETE'])
def delete_student(student_id):
    if not get_store().delete(student_id):
        return not_found()
    return jsonify({'success': True})


# Dashboard
@main_bp.route('/api/dashboard')
def dashboard():
    today = date.today()
    students = get_store().get_all()
    return jsonify({
        'stats': get_dashboard_stats(students, today).to_json(),
        'status': status_breakdown(students, today),
        'monthly': monthly_collections(students, today.year),
    })


# Fees
@main_bp.route('/api/fees/overdue')
def overdue():
    today = date.today()
    students = overdue_students(get_store().get_all(), today)
    return jsonify({'count': len(students), 'students': [student_json(s, today) for s in students]})


@main_bp.route('/api/fees/next_due_date/<student_id>')
def next_due_date(student_id):
    student = get_store().get(student_id)
    if student is None:
        return not_found()
    return jsonify({
        'student_id': student.id,
        'amount': student.monthly_fee,
        'next_due_date': propose_next_due_date(student.fee_frequency).isoformat(),
    })


@main_bp.route('/api/fees/payments', methods=['POST'])
def record_payment():
    form = PaymentForm()
    if not form.validate_on_submit():
        return invalid(form)

    student = add_payment(
        get_store(),
        form.student_id.data,
        form.amount.data,
        as_due_datetime(form.next_due_date.data),
        notes=form.notes.data,
    )
    if student is None:
        return not_found()

    return jsonify({
        'success': True,
        'message': f'Payment of {form.amount.data:,.2f} recorded for {student.name}!',
        'student': student_json(student),
    }), 201


# Import / export
@main_bp.route('/export/backup')
def download_backup():
    content = export_backup(get_store())
    return send_file(
        io.BytesIO(content.encode('utf-8')),
        mimetype='application/json',
        as_attachment=True,
        download_name=backup_filename(),
    )


@main_bp.route('/export/csv')
def download_csv():
    content = export_csv(get_store())
    if content is None:
        return '', 204
    return send_file(
        io.BytesIO(content.encode('utf-8')),
        mimetype='text/csv',
        as_attachment=True,
        download_name=csv_filename(),
    )


@main_bp.route('/import/backup', methods=['POST'])
def upload_backup():
    form = RestoreForm()
    if not form.validate_on_submit():
        return invalid(form)
    if form.confirm.data.strip().lower() != 'yes':
        return jsonify({'success': False,
                        'error': 'Restoring will overwrite current data. Confirm to continue.'}), 400

    result = restore_backup(get_store(), form.file.data.read())
    if not result.ok:
        return jsonify({'success': False, 'error': result.error}), 400
    return jsonify({'success': True, 'count': result.count,
                    'message': 'Data restored successfully!'})


# Insights
@main_bp.route('/api/insights', methods=['POST'])
def insights():
    text = generate_financial_insight(
        get_store().get_all(),
        api_key=current_app.config.get('GROQ_API_KEY'),
        client=current_app.extensions.get('insight_client'),
        model=current_app.config.get('INSIGHT_MODEL'),
    )
    return jsonify({'insight': text})
