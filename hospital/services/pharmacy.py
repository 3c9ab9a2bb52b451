"""
Medications and prescriptions.

Creating a prescription decrements the stock of every medication it
dispenses.  The whole prescription is one atomic block: when any item
asks for more than is on the shelf nothing is written at all.
"""
from __future__ import annotations

import logging
from typing import Optional

from hospital.exceptions import Conflict
from hospital.storage import Storage
from hospital.services.audit import log_action
from hospital.services.dashboard import invalidate_dashboard
from hospital.services.integrity import check_references

logger = logging.getLogger(__name__)


def is_low_stock(medication: dict) -> bool:
    return medication['stock'] <= medication['minStock']


def list_medications(storage: Storage, *, category: Optional[str] = None, low_stock: bool = False) -> list[dict]:
    rows = storage.list('medication', category=category) if category else storage.list('medication')
    if low_stock:
        rows = [m for m in rows if is_low_stock(m)]
    return rows


def create_medication(storage: Storage, data: dict, *, user=None) -> dict:
    medication = storage.create('medication', data)
    log_action(user=user, action='medication_create', object_type='medication', object_id=medication['id'],
               detail={'code': medication['code'], 'stock': medication['stock']})
    return medication


def update_medication(storage: Storage, medication_id: int, data: dict, *, user=None) -> dict:
    with storage.atomic():
        before = storage.get_or_404('medication', medication_id, for_update=True)
        medication = storage.update('medication', medication_id, data)
    if medication['stock'] != before['stock']:
        logger.info('medication %s stock %s -> %s', medication['code'], before['stock'], medication['stock'])
        log_action(user=user, action='medication_restock', object_type='medication', object_id=medication_id,
                   detail={'from': before['stock'], 'to': medication['stock']})
    return medication


def create_prescription(storage: Storage, data: dict, items: list[dict], *, user=None) -> dict:
    """Create a prescription with its items and dispense the stock.

    Raises ``ValidationError`` for unknown references and ``Conflict``
    when a medication does not have enough stock for its item.
    """
    check_references(storage, 'prescription', data)
    for item in items:
        check_references(storage, 'prescription_item', item)

    with storage.atomic():
        prescription = storage.create('prescription', data)
        created = []
        for item in items:
            medication = storage.get_or_404('medication', item['medicationId'], for_update=True)
            quantity = item['quantity']
            if quantity > medication['stock']:
                raise Conflict(
                    f"Insufficient stock for {medication['name']}: requested {quantity}, available {medication['stock']}"
                )
            storage.update('medication', medication['id'], {'stock': medication['stock'] - quantity})
            created.append(storage.create('prescription_item', {**item, 'prescriptionId': prescription['id']}))

    logger.info('prescription %s created with %d items', prescription['id'], len(created))
    log_action(user=user, action='prescription_create', object_type='prescription', object_id=prescription['id'],
               detail={'items': [{'medicationId': i['medicationId'], 'quantity': i['quantity']} for i in created]})
    invalidate_dashboard()
    return {**prescription, 'items': created}


def update_prescription(storage: Storage, prescription_id: int, data: dict, *, user=None) -> dict:
    prescription = storage.update('prescription', prescription_id, data)
    log_action(user=user, action='prescription_update', object_type='prescription', object_id=prescription_id,
               detail={'status': prescription['status']})
    invalidate_dashboard()
    return prescription


def prescription_detail(storage: Storage, prescription_id: int) -> dict:
    prescription = storage.get_or_404('prescription', prescription_id)
    items = []
    for item in storage.list('prescription_item', prescriptionId=prescription['id']):
        items.append({**item, 'medication': storage.get('medication', item['medicationId'])})
    return {**prescription, 'items': items}


def patient_prescriptions(storage: Storage, patient_id: int) -> list[dict]:
    rows = storage.list('prescription', patientId=patient_id)
    return sorted(rows, key=lambda p: p['prescriptionDate'], reverse=True)
