import json
import logging
from datetime import date

from fee_status import calculate_status, last_payment

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'llama-3.3-70b-versatile'

MISSING_KEY_MESSAGE = "API Key is missing. Please configure the environment."
EMPTY_RESPONSE_MESSAGE = "No insights generated."
FAILURE_MESSAGE = "Unable to generate insights at this time. Please check your connection."


def build_snapshot(students, today=None):
    """Anonymized per-student projection: no names, contacts or ids"""
    today = today or date.today()
    snapshot = []
    for s in students:
        latest = last_payment(s)
        snapshot.append({
            'fee': s.monthly_fee,
            'enrollmentYear': s.enrollment_date.year,
            'status': calculate_status(s.next_due_date, today).value,
            'paymentCount': len(s.payments),
            'lastPaymentDate': latest.date.isoformat() if latest else 'Never',
        })
    return snapshot


def build_prompt(snapshot):
    return f"""
You are an academic financial advisor. Analyze the following JSON data representing student fees.

Data: {json.dumps(snapshot)}

Please provide a concise analysis in HTML format (using <ul>, <li>, <strong> tags only, no markdown blocks).
1. Identify the percentage of overdue payments.
2. Provide a projected revenue for next month based on active students.
3. Give 2 actionable suggestions to improve fee collection based on the patterns (e.g. if many new students are overdue vs old students).

Keep the tone professional and encouraging.
"""


def generate_financial_insight(students, api_key=None, client=None, model=DEFAULT_MODEL, today=None):
    """Ask the LLM for a short analysis of the fee book.

    The returned text is display content only. Failures never raise: a
    missing key or a transport error comes back as a readable message.
    """
    if not api_key:
        return MISSING_KEY_MESSAGE

    prompt = build_prompt(build_snapshot(students, today))

    try:
        if client is None:
            # Import Groq only when needed
            from groq import Groq
            client = Groq(api_key=api_key)

        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.3,
        )
        text = response.choices[0].message.content if response.choices else None
        return text.strip() if text and text.strip() else EMPTY_RESPONSE_MESSAGE
    except Exception as e:
        logger.error("Insight generation failed: %s", e)
        return FAILURE_MESSAGE
