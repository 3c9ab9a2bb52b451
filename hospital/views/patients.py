"""
Patient registration endpoints.

Patients are searched by name, MRN, identity number or insurance
number.  A new patient without an MRN receives the next ``MRN#####``.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.serializers.patient import PatientInsuranceSerializer, PatientSearchSerializer, PatientSerializer
from hospital.services import patients as svc
from hospital.storage import get_storage


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients(request):
    storage = get_storage()
    if request.method == 'POST':
        s = PatientSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        patient = svc.create_patient(storage, s.validated_data, user=request.user)
        return Response(patient, status=status.HTTP_201_CREATED)
    q = PatientSearchSerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.search_patients(storage, q.validated_data.get('query')))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def patient_detail(request, patient_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = PatientSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_patient(storage, patient_id, s.validated_data, user=request.user))
    return Response(storage.get_or_404('patient', patient_id))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patient_insurances(request, patient_id: int):
    storage = get_storage()
    if request.method == 'POST':
        s = PatientInsuranceSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        row = svc.add_patient_insurance(storage, patient_id, s.validated_data, user=request.user)
        return Response(row, status=status.HTTP_201_CREATED)
    return Response(svc.patient_insurances(storage, patient_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def insurance_providers(request):
    active = str(request.query_params.get('active', '')).lower() in ('1', 'true', 'yes')
    return Response(svc.insurance_providers(get_storage(), active_only=active))
