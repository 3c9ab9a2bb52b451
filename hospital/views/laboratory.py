"""Laboratory endpoints."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.serializers.clinical import LabRequestCreateSerializer, LabResultSerializer
from hospital.services import laboratory as svc
from hospital.storage import get_storage

from .records import require_patient_id


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lab_tests(request):
    return Response(get_storage().list('lab_test'))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def lab_requests(request):
    storage = get_storage()
    if request.method == 'POST':
        s = LabRequestCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        created = svc.create_lab_request(storage, vd['request'], vd['items'], user=request.user)
        return Response(created, status=status.HTTP_201_CREATED)
    return Response(svc.patient_lab_requests(storage, require_patient_id(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lab_request_detail(request, request_id: int):
    return Response(svc.lab_request_detail(get_storage(), request_id))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def lab_results(request):
    s = LabResultSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    result = svc.record_lab_result(get_storage(), s.validated_data, user=request.user)
    return Response(result, status=status.HTTP_201_CREATED)


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def lab_result_detail(request, result_id: int):
    s = LabResultSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    return Response(svc.update_lab_result(get_storage(), result_id, s.validated_data, user=request.user))
