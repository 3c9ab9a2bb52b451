"""
Billing and payments.

The payment status of a bill is always derived here from its amounts;
whatever status a client sends is ignored.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from django.utils import timezone
from rest_framework.exceptions import ValidationError

from hospital.models import Billing
from hospital.storage import Storage
from hospital.services.audit import log_action
from hospital.services.dashboard import invalidate_dashboard
from hospital.services.integrity import check_references

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


def classify_payment(total, paid) -> str:
    """``paid`` once nothing remains, ``pending`` when nothing is paid, else ``partial``.

    A bill with a zero total is settled from the start.
    """
    total = Decimal(total or 0)
    paid = Decimal(paid or 0)
    if paid >= total:
        return Billing.STATUS_PAID
    if paid <= ZERO:
        return Billing.STATUS_PENDING
    return Billing.STATUS_PARTIAL


def _validate_amounts(total, paid) -> None:
    errors = {}
    if total is not None and Decimal(total) < ZERO:
        errors['totalAmount'] = ['Total amount cannot be negative']
    if paid is not None and Decimal(paid) < ZERO:
        errors['paidAmount'] = ['Paid amount cannot be negative']
    elif paid is not None and total is not None and Decimal(paid) > Decimal(total):
        errors['paidAmount'] = [f'Paid amount {paid} exceeds total amount {total}']
    if errors:
        raise ValidationError(errors)


def next_invoice_number(storage: Storage, bill_date=None) -> str:
    """``INV/YYMMDD/NNN``, numbered per bill date."""
    bill_date = bill_date or timezone.localdate()
    prefix = f"INV/{bill_date.strftime('%y%m%d')}/"
    taken = {b['invoiceNumber'] for b in storage.list('billing') if b['invoiceNumber'].startswith(prefix)}
    n = len(taken) + 1
    while f'{prefix}{n:03d}' in taken:
        n += 1
    return f'{prefix}{n:03d}'


def create_billing(storage: Storage, data: dict, items: list[dict], *, user=None) -> dict:
    data = dict(data)
    data.pop('status', None)
    check_references(storage, 'billing', data)
    data.setdefault('paidAmount', ZERO)
    _validate_amounts(data.get('totalAmount'), data.get('paidAmount'))
    data['status'] = classify_payment(data.get('totalAmount'), data.get('paidAmount'))

    with storage.atomic():
        if not data.get('invoiceNumber'):
            data['invoiceNumber'] = next_invoice_number(storage, data.get('billDate'))
        billing = storage.create('billing', data)
        created = []
        for item in items:
            item = dict(item)
            if item.get('totalPrice') is None:
                item['totalPrice'] = Decimal(item['quantity']) * Decimal(item['unitPrice'])
            created.append(storage.create('billing_item', {**item, 'billingId': billing['id']}))

    logger.info('billing %s issued for patient %s (%s)', billing['invoiceNumber'], billing['patientId'], billing['status'])
    log_action(user=user, action='billing_create', object_type='billing', object_id=billing['id'],
               detail={'invoiceNumber': billing['invoiceNumber'], 'totalAmount': str(billing['totalAmount'])})
    invalidate_dashboard()
    return {**billing, 'items': created}


def update_billing(storage: Storage, billing_id: int, data: dict, *, user=None) -> dict:
    """Record a payment or amend a bill, recomputing its status."""
    changes = dict(data)
    changes.pop('status', None)
    check_references(storage, 'billing', changes)
    with storage.atomic():
        current = storage.get_or_404('billing', billing_id, for_update=True)
        total = changes.get('totalAmount', current['totalAmount'])
        paid = changes.get('paidAmount', current['paidAmount'])
        _validate_amounts(total, paid)
        changes['status'] = classify_payment(total, paid)
        billing = storage.update('billing', billing_id, changes)

    if billing['paidAmount'] != current['paidAmount']:
        logger.info('payment on %s: %s -> %s (%s)', billing['invoiceNumber'], current['paidAmount'],
                    billing['paidAmount'], billing['status'])
        log_action(user=user, action='billing_payment', object_type='billing', object_id=billing_id,
                   detail={'paidAmount': str(billing['paidAmount']), 'status': billing['status']})
    invalidate_dashboard()
    return billing


def billing_detail(storage: Storage, billing_id: int) -> dict:
    billing = storage.get_or_404('billing', billing_id)
    return {**billing, 'items': storage.list('billing_item', billingId=billing['id'])}


def pending_billings(storage: Storage) -> list[dict]:
    return [b for b in storage.list('billing') if b['status'] in (Billing.STATUS_PENDING, Billing.STATUS_PARTIAL)]


def patient_billings(storage: Storage, patient_id: int) -> list[dict]:
    rows = storage.list('billing', patientId=patient_id)
    return sorted(rows, key=lambda b: b['billDate'], reverse=True)
