"""Appointments, medical records and laboratory payloads."""
from rest_framework import serializers

from hospital.models import Appointment, LabRequest, MedicalRecord

from .fields import CleanTextField, LenientDateField, optional_char


def _choices(model_choices):
    return [value for value, _ in model_choices]


class AppointmentSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    departmentId = serializers.IntegerField(min_value=1)
    appointmentDate = LenientDateField()
    appointmentTime = serializers.TimeField()
    status = serializers.ChoiceField(choices=_choices(Appointment.STATUS_CHOICES), required=False)
    notes = CleanTextField()


class AppointmentQuerySerializer(serializers.Serializer):
    today = serializers.BooleanField(required=False, default=False)
    upcoming = serializers.BooleanField(required=False, default=False)
    patientId = serializers.IntegerField(min_value=1, required=False)
    doctorId = serializers.IntegerField(min_value=1, required=False)
    departmentId = serializers.IntegerField(min_value=1, required=False)


class MedicalRecordSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    departmentId = serializers.IntegerField(min_value=1)
    visitDate = LenientDateField()
    visitType = serializers.ChoiceField(choices=_choices(MedicalRecord.VISIT_TYPE_CHOICES))
    chiefComplaint = CleanTextField()
    diagnosis = CleanTextField()
    secondaryDiagnosis = CleanTextField()
    clinicalNotes = CleanTextField()
    treatment = CleanTextField()
    vitalSigns = serializers.JSONField(required=False, allow_null=True)


class PatientFilterSerializer(serializers.Serializer):
    """``?patientId=`` filter shared by the per-patient listings."""
    patientId = serializers.IntegerField(min_value=1, required=False)


class LabRequestSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    medicalRecordId = serializers.IntegerField(min_value=1)
    requestDate = LenientDateField()
    status = serializers.ChoiceField(choices=_choices(LabRequest.STATUS_CHOICES), required=False)


class LabRequestItemSerializer(serializers.Serializer):
    labTestId = serializers.IntegerField(min_value=1)
    notes = CleanTextField()


class LabRequestCreateSerializer(serializers.Serializer):
    request = LabRequestSerializer()
    items = LabRequestItemSerializer(many=True, allow_empty=False)


class LabResultSerializer(serializers.Serializer):
    labRequestId = serializers.IntegerField(min_value=1)
    labTestId = serializers.IntegerField(min_value=1)
    result = CleanTextField(required=True, allow_null=False, allow_blank=False)
    referenceRange = optional_char()
    unit = optional_char(32)
    flag = serializers.ChoiceField(choices=['normal', 'high', 'low', 'critical'], required=False, allow_null=True)
    performedById = serializers.IntegerField(min_value=1)
    performedDate = LenientDateField()
    verified = serializers.BooleanField(required=False)
    verifiedById = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    verifiedDate = LenientDateField(required=False, allow_null=True)


class DoctorQuerySerializer(serializers.Serializer):
    departmentId = serializers.IntegerField(min_value=1, required=False)
