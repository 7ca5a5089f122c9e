import math

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import DateField, FloatField, IntegerField, SelectField, StringField
from wtforms.validators import (DataRequired, InputRequired, Length, NumberRange, Optional,
                                ValidationError)

from models import FeeFrequency

FREQUENCY_CHOICES = [
    (FeeFrequency.MONTHLY.value, 'Monthly'),
    (FeeFrequency.ANNUALLY.value, 'Annually'),
    (FeeFrequency.ONE_TIME.value, 'One Time'),
    (FeeFrequency.INSTALLMENT.value, 'Installments'),
]


def finite(form, field):
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError("Must be a finite number.")


class StudentForm(FlaskForm):
    name = StringField('Full Name', validators=[DataRequired(), Length(max=200)])
    father_name = StringField("Father's Name", validators=[Optional(), Length(max=200)])
    address = StringField('Address', validators=[Optional()])
    contact_number = StringField('Contact Number', validators=[Optional(), Length(max=30)])
    course = StringField('Course', validators=[DataRequired(), Length(max=200)])
    photo = StringField('Photo', validators=[Optional()])
    fee_frequency = SelectField('Fee Type', choices=FREQUENCY_CHOICES,
                                default=FeeFrequency.MONTHLY.value)
    monthly_fee = FloatField('Amount', validators=[InputRequired(), finite, NumberRange(min=0)])
    total_installments = IntegerField('Total Installments',
                                      validators=[Optional(), NumberRange(min=1, max=60)])
    next_due_date = DateField('Next Due Date', validators=[DataRequired()], format='%Y-%m-%d')

    def student_fields(self):
        """Editable fields as keyword arguments for the Student schema"""
        frequency = FeeFrequency(self.fee_frequency.data)
        return {
            'name': self.name.data.strip(),
            'father_name': (self.father_name.data or '').strip() or None,
            'address': (self.address.data or '').strip(),
            'contact_number': (self.contact_number.data or '').strip(),
            'course': self.course.data.strip(),
            'photo': self.photo.data or None,
            'fee_frequency': frequency,
            'monthly_fee': self.monthly_fee.data,
            # Installment count only means something for installment plans
            'total_installments': (self.total_installments.data
                                   if frequency is FeeFrequency.INSTALLMENT else None),
        }


class PaymentForm(FlaskForm):
    student_id = StringField('Student', validators=[DataRequired()])
    amount = FloatField('Amount', validators=[InputRequired(), finite, NumberRange(min=0.01)])
    next_due_date = DateField('Next Due Date', validators=[DataRequired()], format='%Y-%m-%d')
    notes = StringField('Notes', validators=[Optional(), Length(max=500)])


class RestoreForm(FlaskForm):
    file = FileField('Backup File', validators=[FileRequired()])
    confirm = StringField('Confirm', validators=[DataRequired()])
