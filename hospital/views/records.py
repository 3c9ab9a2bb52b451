"""Medical record endpoints."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.serializers.clinical import MedicalRecordSerializer, PatientFilterSerializer
from hospital.services import scheduling as svc
from hospital.storage import get_storage


def require_patient_id(request, hint: str = '') -> int:
    """Per-patient listings refuse to dump the whole table."""
    q = PatientFilterSerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    patient_id = q.validated_data.get('patientId')
    if not patient_id:
        raise ValidationError({'patientId': [f'Patient ID is required{hint}']})
    return patient_id


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def medical_records(request):
    storage = get_storage()
    if request.method == 'POST':
        s = MedicalRecordSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        record = svc.create_medical_record(storage, s.validated_data, user=request.user)
        return Response(record, status=status.HTTP_201_CREATED)
    return Response(svc.patient_medical_records(storage, require_patient_id(request)))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def medical_record_detail(request, record_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = MedicalRecordSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_medical_record(storage, record_id, s.validated_data, user=request.user))
    return Response(storage.get_or_404('medical_record', record_id))
