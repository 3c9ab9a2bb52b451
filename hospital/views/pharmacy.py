"""
Pharmacy endpoints: medication inventory and prescriptions.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.permissions import PharmacyStaff
from hospital.serializers.pharmacy import (
    MedicationQuerySerializer,
    MedicationSerializer,
    PrescriptionCreateSerializer,
    PrescriptionSerializer,
)
from hospital.services import pharmacy as svc
from hospital.storage import get_storage

from .records import require_patient_id


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, PharmacyStaff])
def medications(request):
    storage = get_storage()
    if request.method == 'POST':
        s = MedicationSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return Response(svc.create_medication(storage, s.validated_data, user=request.user),
                        status=status.HTTP_201_CREATED)
    q = MedicationQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.list_medications(storage, category=q.validated_data.get('category'),
                                         low_stock=q.validated_data['lowStock']))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, PharmacyStaff])
def medication_detail(request, medication_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = MedicationSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_medication(storage, medication_id, s.validated_data, user=request.user))
    return Response(storage.get_or_404('medication', medication_id))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, PharmacyStaff])
def prescriptions(request):
    """``POST`` body: ``{"prescription": {...}, "items": [...]}``.

    Stock of every medication is decremented in the same transaction;
    a shortfall on any item rejects the whole prescription with 409.
    """
    storage = get_storage()
    if request.method == 'POST':
        s = PrescriptionCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        prescription = svc.create_prescription(storage, vd['prescription'], vd['items'], user=request.user)
        return Response(prescription, status=status.HTTP_201_CREATED)
    return Response(svc.patient_prescriptions(storage, require_patient_id(request)))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, PharmacyStaff])
def prescription_detail(request, prescription_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = PrescriptionSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_prescription(storage, prescription_id, s.validated_data, user=request.user))
    return Response(svc.prescription_detail(storage, prescription_id))
