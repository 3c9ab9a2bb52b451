"""Departments, doctors, appointments and medical records."""
from __future__ import annotations

from typing import Optional

from django.utils import timezone

from hospital.storage import Storage
from hospital.services.audit import log_action
from hospital.services.dashboard import invalidate_dashboard
from hospital.services.integrity import check_references


def list_doctors(storage: Storage, department_id: Optional[int] = None) -> list[dict]:
    if department_id:
        return storage.list('doctor', departmentId=department_id)
    return storage.list('doctor')


def doctor_schedules(storage: Storage, doctor_id: int) -> list[dict]:
    storage.get_or_404('doctor', doctor_id)
    rows = storage.list('doctor_schedule', doctorId=doctor_id)
    return sorted(rows, key=lambda s: (s['dayOfWeek'], s['startTime']))


def _by_slot(rows):
    return sorted(rows, key=lambda a: (a['appointmentDate'], a['appointmentTime']))


def today_appointments(storage: Storage) -> list[dict]:
    return _by_slot(storage.list('appointment', appointmentDate=timezone.localdate()))


def upcoming_appointments(storage: Storage) -> list[dict]:
    today = timezone.localdate()
    return _by_slot(a for a in storage.list('appointment') if a['appointmentDate'] >= today)


def filter_appointments(storage: Storage, *, today: bool = False, upcoming: bool = False,
                        patient_id=None, doctor_id=None, department_id=None) -> list[dict]:
    if today:
        rows = today_appointments(storage)
    elif upcoming:
        rows = upcoming_appointments(storage)
    else:
        rows = _by_slot(storage.list('appointment'))
    for key, value in (('patientId', patient_id), ('doctorId', doctor_id), ('departmentId', department_id)):
        if value:
            rows = [a for a in rows if a[key] == value]
    return rows


def create_appointment(storage: Storage, data: dict, *, user=None) -> dict:
    check_references(storage, 'appointment', data)
    appointment = storage.create('appointment', data)
    log_action(user=user, action='appointment_create', object_type='appointment', object_id=appointment['id'],
               detail={'patientId': appointment['patientId'], 'doctorId': appointment['doctorId']})
    invalidate_dashboard()
    return appointment


def update_appointment(storage: Storage, appointment_id: int, data: dict, *, user=None) -> dict:
    check_references(storage, 'appointment', data)
    appointment = storage.update('appointment', appointment_id, data)
    log_action(user=user, action='appointment_update', object_type='appointment', object_id=appointment_id,
               detail={'status': appointment['status']})
    invalidate_dashboard()
    return appointment


def patient_medical_records(storage: Storage, patient_id: int) -> list[dict]:
    rows = storage.list('medical_record', patientId=patient_id)
    return sorted(rows, key=lambda r: r['visitDate'], reverse=True)


def create_medical_record(storage: Storage, data: dict, *, user=None) -> dict:
    check_references(storage, 'medical_record', data)
    record = storage.create('medical_record', data)
    log_action(user=user, action='medical_record_create', object_type='medical_record', object_id=record['id'],
               detail={'patientId': record['patientId'], 'visitType': record['visitType']})
    invalidate_dashboard()
    return record


def update_medical_record(storage: Storage, record_id: int, data: dict, *, user=None) -> dict:
    check_references(storage, 'medical_record', data)
    record = storage.update('medical_record', record_id, data)
    invalidate_dashboard()
    return record
