from __future__ import annotations

import re

from hospital.storage import Storage
from hospital.services.audit import log_action
from hospital.services.dashboard import invalidate_dashboard
from hospital.services.integrity import check_references

_MRN_RE = re.compile(r'^MRN(\d+)$')
SEARCH_FIELDS = ('name', 'medicalRecordNumber', 'identityNumber', 'insuranceNumber')


def search_patients(storage: Storage, query: str | None = None) -> list[dict]:
    rows = storage.list('patient')
    if not query:
        return rows
    needle = query.strip().lower()
    return [p for p in rows if any(needle in (p.get(f) or '').lower() for f in SEARCH_FIELDS)]


def next_medical_record_number(storage: Storage) -> str:
    highest = 0
    for p in storage.list('patient'):
        m = _MRN_RE.match(p['medicalRecordNumber'] or '')
        if m:
            highest = max(highest, int(m.group(1)))
    return f'MRN{highest + 1:05d}'


def create_patient(storage: Storage, data: dict, *, user=None) -> dict:
    with storage.atomic():
        if not data.get('medicalRecordNumber'):
            data = {**data, 'medicalRecordNumber': next_medical_record_number(storage)}
        patient = storage.create('patient', data)
    log_action(user=user, action='patient_create', object_type='patient', object_id=patient['id'],
               detail={'medicalRecordNumber': patient['medicalRecordNumber']})
    invalidate_dashboard()
    return patient


def update_patient(storage: Storage, patient_id: int, data: dict, *, user=None) -> dict:
    patient = storage.update('patient', patient_id, data)
    log_action(user=user, action='patient_update', object_type='patient', object_id=patient_id,
               detail={'fields': sorted(data)})
    invalidate_dashboard()
    return patient


def patient_insurances(storage: Storage, patient_id: int) -> list[dict]:
    storage.get_or_404('patient', patient_id)
    out = []
    for row in storage.list('patient_insurance', patientId=patient_id):
        out.append({**row, 'insuranceProvider': storage.get('insurance_provider', row['insuranceProviderId'])})
    return out


def add_patient_insurance(storage: Storage, patient_id: int, data: dict, *, user=None) -> dict:
    storage.get_or_404('patient', patient_id)
    data = {**data, 'patientId': patient_id}
    check_references(storage, 'patient_insurance', data)
    row = storage.create('patient_insurance', data)
    log_action(user=user, action='patient_insurance_create', object_type='patient', object_id=patient_id,
               detail={'insuranceProviderId': row['insuranceProviderId']})
    return row


def insurance_providers(storage: Storage, active_only: bool = False) -> list[dict]:
    if active_only:
        return storage.list('insurance_provider', status='active')
    return storage.list('insurance_provider')
