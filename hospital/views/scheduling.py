"""Departments, doctors, schedules and appointments."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.serializers.clinical import AppointmentQuerySerializer, AppointmentSerializer, DoctorQuerySerializer
from hospital.services import scheduling as svc
from hospital.storage import get_storage


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def departments(request):
    return Response(get_storage().list('department'))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def department_detail(request, department_id: int):
    return Response(get_storage().get_or_404('department', department_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctors(request):
    q = DoctorQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.list_doctors(get_storage(), q.validated_data.get('departmentId')))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_detail(request, doctor_id: int):
    return Response(get_storage().get_or_404('doctor', doctor_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_schedules(request, doctor_id: int):
    return Response(svc.doctor_schedules(get_storage(), doctor_id))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    storage = get_storage()
    if request.method == 'POST':
        s = AppointmentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        appointment = svc.create_appointment(storage, s.validated_data, user=request.user)
        return Response(appointment, status=status.HTTP_201_CREATED)
    q = AppointmentQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    return Response(svc.filter_appointments(
        storage,
        today=vd['today'],
        upcoming=vd['upcoming'],
        patient_id=vd.get('patientId'),
        doctor_id=vd.get('doctorId'),
        department_id=vd.get('departmentId'),
    ))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, appointment_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = AppointmentSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_appointment(storage, appointment_id, s.validated_data, user=request.user))
    return Response(storage.get_or_404('appointment', appointment_id))
