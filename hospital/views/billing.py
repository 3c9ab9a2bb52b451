"""
Billing endpoints.

The server owns the payment status: ``PUT /api/billings/:id`` with a new
``paidAmount`` recomputes it and rejects negative or excess payments.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.permissions import CashierStaff
from hospital.serializers.billing import BillingCreateSerializer, BillingQuerySerializer, BillingSerializer
from hospital.services import billing as svc
from hospital.storage import get_storage


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, CashierStaff])
def billings(request):
    storage = get_storage()
    if request.method == 'POST':
        s = BillingCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        return Response(svc.create_billing(storage, vd['billing'], vd['items'], user=request.user),
                        status=status.HTTP_201_CREATED)
    q = BillingQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    if q.validated_data['pending']:
        return Response(svc.pending_billings(storage))
    patient_id = q.validated_data.get('patientId')
    if not patient_id:
        raise ValidationError({'patientId': ['Patient ID is required or specify pending=true']})
    return Response(svc.patient_billings(storage, patient_id))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, CashierStaff])
def billing_detail(request, billing_id: int):
    storage = get_storage()
    if request.method == 'PUT':
        s = BillingSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return Response(svc.update_billing(storage, billing_id, s.validated_data, user=request.user))
    return Response(svc.billing_detail(storage, billing_id))
