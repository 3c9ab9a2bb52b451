"""
Inpatient endpoints: rooms, beds and admissions.

Admissions and discharges keep the bed status in step; see
``hospital.services.inpatient``.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.permissions import AdminWrites, WardStaff
from hospital.serializers.inpatient import AdmissionQuerySerializer, AdmissionSerializer, RoomQuerySerializer, RoomSerializer
from hospital.services import inpatient as svc
from hospital.storage import get_storage


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, AdminWrites])
def rooms(request):
    storage = get_storage()
    if request.method == 'POST':
        s = RoomSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return Response(svc.create_room(storage, s.validated_data, user=request.user), status=status.HTTP_201_CREATED)
    q = RoomQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.list_rooms(storage, q.validated_data.get('type')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def room_beds(request, room_id: int):
    storage = get_storage()
    storage.get_or_404('room', room_id)
    return Response(svc.room_beds(storage, room_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def available_beds(request):
    return Response(svc.available_beds(get_storage()))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, WardStaff])
def admissions(request):
    storage = get_storage()
    if request.method == 'POST':
        s = AdmissionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        admission = svc.admit_patient(storage, s.validated_data, user=request.user)
        return Response(admission, status=status.HTTP_201_CREATED)
    q = AdmissionQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    if q.validated_data['active']:
        return Response(svc.active_admissions(storage))
    patient_id = q.validated_data.get('patientId')
    if not patient_id:
        raise ValidationError({'patientId': ['Patient ID is required or specify active=true']})
    return Response(svc.patient_admissions(storage, patient_id))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, WardStaff])
def admission_detail(request, admission_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = AdmissionSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_admission(storage, admission_id, s.validated_data, user=request.user))
    return Response(storage.get_or_404('admission', admission_id))
