"""
Inpatient rooms, beds and admissions.

A bed is ``occupied`` exactly while one ``active`` admission points at
it.  Every rule that flips a bed runs inside ``storage.atomic()`` with
the bed read ``for_update`` so concurrent admissions to the same bed
cannot both succeed.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.utils import timezone

from hospital.exceptions import Conflict
from hospital.models import Bed, InpatientAdmission
from hospital.storage import Storage
from hospital.services.audit import log_action
from hospital.services.dashboard import invalidate_dashboard
from hospital.services.integrity import check_references
from hospital.services.realtime import publish_bed_status

logger = logging.getLogger(__name__)

ACTIVE = InpatientAdmission.STATUS_ACTIVE
CLOSED_STATUSES = (InpatientAdmission.STATUS_DISCHARGED, InpatientAdmission.STATUS_TRANSFERRED)


def list_rooms(storage: Storage, room_type: Optional[str] = None) -> list[dict]:
    if room_type:
        return storage.list('room', roomType=room_type)
    return storage.list('room')


def create_room(storage: Storage, data: dict, *, user=None) -> dict:
    """Create a room together with its ``bedCount`` beds, all available."""
    with storage.atomic():
        room = storage.create('room', data)
        beds = [
            storage.create('bed', {
                'roomId': room['id'],
                'bedNumber': f"{room['roomNumber']}-{n}",
                'status': Bed.STATUS_AVAILABLE,
            })
            for n in range(1, room['bedCount'] + 1)
        ]
    log_action(user=user, action='room_create', object_type='room', object_id=room['id'],
               detail={'beds': len(beds)})
    invalidate_dashboard()
    return {**room, 'beds': beds}


def room_beds(storage: Storage, room_id: int) -> list[dict]:
    return storage.list('bed', roomId=room_id)


def available_beds(storage: Storage) -> list[dict]:
    return storage.list('bed', status=Bed.STATUS_AVAILABLE)


def _occupy(storage: Storage, bed_id: int) -> dict:
    bed = storage.get_or_404('bed', bed_id, for_update=True)
    if bed['status'] != Bed.STATUS_AVAILABLE:
        raise Conflict(f"Bed {bed['bedNumber']} is not available (status: {bed['status']})")
    return storage.update('bed', bed['id'], {'status': Bed.STATUS_OCCUPIED})


def _release(storage: Storage, bed_id: int) -> Optional[dict]:
    bed = storage.get('bed', bed_id, for_update=True)
    if bed is None:
        logger.warning('admission references missing bed %s', bed_id)
        return None
    return storage.update('bed', bed['id'], {'status': Bed.STATUS_AVAILABLE})


def admit_patient(storage: Storage, data: dict, *, user=None) -> dict:
    """Create an ``active`` admission and mark its bed occupied.

    Raises ``Conflict`` when the bed is occupied or under maintenance and
    ``NotFound`` when the bed does not exist.
    """
    check_references(storage, 'admission', data)
    with storage.atomic():
        bed = _occupy(storage, data['bedId'])
        admission = storage.create('admission', {**data, 'status': ACTIVE})
    logger.info('patient %s admitted to bed %s (admission %s)', admission['patientId'], bed['bedNumber'], admission['id'])
    log_action(user=user, action='admission_create', object_type='admission', object_id=admission['id'],
               detail={'bedId': bed['id'], 'patientId': admission['patientId']})
    publish_bed_status(bed)
    invalidate_dashboard()
    return admission


def update_admission(storage: Storage, admission_id: int, data: dict, *, user=None) -> dict:
    """Apply a partial update, keeping the bed status in step.

    * ``status`` -> discharged/transferred frees the bed and stamps the
      discharge date/time when the caller did not send them.
    * ``bedId`` on an active admission moves the patient to another
      available bed.
    """
    changed_beds: list[dict] = []
    with storage.atomic():
        admission = storage.get_or_404('admission', admission_id, for_update=True)
        changes = dict(data)
        new_status = changes.get('status', admission['status'])
        new_bed_id = changes.get('bedId', admission['bedId'])

        if new_status != admission['status'] and admission['status'] != ACTIVE:
            raise Conflict(f"Admission {admission_id} is not active (status: {admission['status']})")
        if new_bed_id != admission['bedId'] and admission['status'] != ACTIVE:
            raise Conflict(f'Admission {admission_id} is not active; its bed cannot change')
        check_references(storage, 'admission', changes)

        if new_status in CLOSED_STATUSES and admission['status'] == ACTIVE:
            now = timezone.localtime()
            changes.setdefault('dischargeDate', now.date())
            changes.setdefault('dischargeTime', now.time().replace(microsecond=0))
            changes.pop('bedId', None)
            released = _release(storage, admission['bedId'])
            if released:
                changed_beds.append(released)
        elif new_bed_id != admission['bedId']:
            changed_beds.append(_occupy(storage, new_bed_id))
            released = _release(storage, admission['bedId'])
            if released:
                changed_beds.append(released)

        updated = storage.update('admission', admission_id, changes)

    if updated['status'] != admission['status']:
        logger.info('admission %s %s -> %s', admission_id, admission['status'], updated['status'])
        log_action(user=user, action='admission_discharge', object_type='admission', object_id=admission_id,
                   detail={'status': updated['status'], 'bedId': admission['bedId']})
    elif updated['bedId'] != admission['bedId']:
        log_action(user=user, action='admission_move', object_type='admission', object_id=admission_id,
                   detail={'from': admission['bedId'], 'to': updated['bedId']})
    for bed in changed_beds:
        publish_bed_status(bed)
    invalidate_dashboard()
    return updated


def active_admissions(storage: Storage) -> list[dict]:
    return storage.list('admission', status=ACTIVE)


def patient_admissions(storage: Storage, patient_id: int) -> list[dict]:
    rows = storage.list('admission', patientId=patient_id)
    return sorted(rows, key=lambda a: a['admissionDate'], reverse=True)
