"""
Storage interface shared by the database and in-memory backends.

Records are plain dictionaries keyed by the camelCase names the API
exposes (``medicalRecordNumber``, ``patientId``...).  The field list of
every entity is derived from the Django model so that both backends
return identical shapes.
"""
from __future__ import annotations

import abc
import re
from contextlib import AbstractContextManager
from typing import Any, Dict, List, Optional, Type

from django.db import models as dj_models
from rest_framework.exceptions import APIException, NotFound

from hospital import models
from hospital.exceptions import Conflict

Record = Dict[str, Any]

ENTITY_MODELS: dict[str, Type[dj_models.Model]] = {
    'patient': models.Patient,
    'department': models.Department,
    'doctor': models.Doctor,
    'doctor_schedule': models.DoctorSchedule,
    'appointment': models.Appointment,
    'medical_record': models.MedicalRecord,
    'prescription': models.Prescription,
    'prescription_item': models.PrescriptionItem,
    'medication': models.Medication,
    'lab_test': models.LabTest,
    'lab_request': models.LabRequest,
    'lab_request_item': models.LabRequestItem,
    'lab_result': models.LabResult,
    'room': models.Room,
    'bed': models.Bed,
    'admission': models.InpatientAdmission,
    'billing': models.Billing,
    'billing_item': models.BillingItem,
    'insurance_provider': models.InsuranceProvider,
    'patient_insurance': models.PatientInsurance,
}

# Human readable names used in error messages.
ENTITY_LABELS = {
    'patient': 'Patient',
    'department': 'Department',
    'doctor': 'Doctor',
    'doctor_schedule': 'Doctor schedule',
    'appointment': 'Appointment',
    'medical_record': 'Medical record',
    'prescription': 'Prescription',
    'prescription_item': 'Prescription item',
    'medication': 'Medication',
    'lab_test': 'Lab test',
    'lab_request': 'Lab request',
    'lab_request_item': 'Lab request item',
    'lab_result': 'Lab result',
    'room': 'Room',
    'bed': 'Bed',
    'admission': 'Inpatient admission',
    'billing': 'Billing',
    'billing_item': 'Billing item',
    'insurance_provider': 'Insurance provider',
    'patient_insurance': 'Patient insurance',
}

# Foreign keys checked by the service layer before a record is created.
REFERENCES: dict[str, dict[str, str]] = {
    'doctor': {'departmentId': 'department'},
    'doctor_schedule': {'doctorId': 'doctor', 'departmentId': 'department'},
    'appointment': {'patientId': 'patient', 'doctorId': 'doctor', 'departmentId': 'department'},
    'medical_record': {'patientId': 'patient', 'doctorId': 'doctor', 'departmentId': 'department'},
    'prescription': {'medicalRecordId': 'medical_record', 'patientId': 'patient', 'doctorId': 'doctor'},
    'prescription_item': {'medicationId': 'medication'},
    'lab_request': {'patientId': 'patient', 'doctorId': 'doctor', 'medicalRecordId': 'medical_record'},
    'lab_request_item': {'labTestId': 'lab_test'},
    'lab_result': {'labRequestId': 'lab_request', 'labTestId': 'lab_test'},
    'admission': {'patientId': 'patient', 'doctorId': 'doctor'},
    'billing': {'patientId': 'patient'},
    'patient_insurance': {'patientId': 'patient', 'insuranceProviderId': 'insurance_provider'},
}

_CAMEL_RE = re.compile(r'_([a-z])')


def camelize(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def columns(entity: str) -> dict[str, dj_models.Field]:
    """Return ``{camelName: field}`` for the concrete fields of *entity*."""
    model = model_for(entity)
    return {camelize(f.attname): f for f in model._meta.concrete_fields}


def unique_columns(entity: str) -> list[str]:
    return [name for name, f in columns(entity).items() if f.unique and not f.primary_key]


def model_for(entity: str) -> Type[dj_models.Model]:
    try:
        return ENTITY_MODELS[entity]
    except KeyError:
        raise LookupError(f'unknown entity {entity!r}') from None


def not_found(entity: str, pk) -> APIException:
    return NotFound(f'{ENTITY_LABELS.get(entity, entity)} with ID {pk} not found')


def duplicate(entity: str, field: str, value) -> APIException:
    return Conflict(f'{ENTITY_LABELS.get(entity, entity)} with {field} {value!r} already exists')


def clean(entity: str, data: Record) -> Record:
    """Coerce incoming values to the Python types of the model fields.

    Unknown keys are a programming error and raise ``KeyError``.
    """
    cols = columns(entity)
    out: Record = {}
    for key, value in data.items():
        if key == 'id':
            continue
        if key not in cols:
            raise KeyError(f'{entity} has no field {key!r}')
        field = cols[key]
        out[key] = None if value is None else field.to_python(value)
    return out


class Storage(abc.ABC):
    """Entity store used by every service.

    Implementations must make :meth:`atomic` blocks all-or-nothing and
    must serialise ``for_update`` reads taken inside them.
    """

    name = 'abstract'

    @abc.abstractmethod
    def get(self, entity: str, pk: int, *, for_update: bool = False) -> Optional[Record]:
        ...

    @abc.abstractmethod
    def list(self, entity: str, **filters: Any) -> List[Record]:
        ...

    @abc.abstractmethod
    def create(self, entity: str, data: Record) -> Record:
        ...

    @abc.abstractmethod
    def update(self, entity: str, pk: int, data: Record) -> Record:
        ...

    @abc.abstractmethod
    def atomic(self) -> AbstractContextManager:
        ...

    def count(self, entity: str, **filters: Any) -> int:
        return len(self.list(entity, **filters))

    def get_or_404(self, entity: str, pk: int, *, for_update: bool = False) -> Record:
        record = self.get(entity, pk, for_update=for_update)
        if record is None:
            raise not_found(entity, pk)
        return record
