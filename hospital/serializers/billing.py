from rest_framework import serializers

from hospital.models import Billing

from .fields import LenientDateField, money, optional_char


class BillingSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    invoiceNumber = serializers.CharField(max_length=32, required=False, allow_blank=True)
    billDate = LenientDateField()
    billType = serializers.ChoiceField(choices=[t for t, _ in Billing.BILL_TYPE_CHOICES])
    totalAmount = money()
    paidAmount = money(required=False)
    paymentMethod = serializers.ChoiceField(choices=['cash', 'card', 'insurance'], required=False, allow_null=True)
    insuranceProvider = optional_char()
    insuranceCoverageAmount = money(required=False, allow_null=True, min_value=0)
    # Ignored: the status is derived from the amounts.
    status = serializers.ChoiceField(choices=[s for s, _ in Billing.STATUS_CHOICES], required=False)


class BillingItemSerializer(serializers.Serializer):
    itemType = serializers.ChoiceField(choices=['consultation', 'medication', 'lab', 'room', 'procedure'])
    itemId = serializers.IntegerField(min_value=0)
    description = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    unitPrice = money(min_value=0)
    totalPrice = money(required=False, min_value=0)


class BillingCreateSerializer(serializers.Serializer):
    billing = BillingSerializer()
    items = BillingItemSerializer(many=True, required=False, default=list)


class BillingQuerySerializer(serializers.Serializer):
    pending = serializers.BooleanField(required=False, default=False)
    patientId = serializers.IntegerField(min_value=1, required=False)
