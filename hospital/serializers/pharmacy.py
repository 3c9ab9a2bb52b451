from rest_framework import serializers

from hospital.models import Prescription

from .fields import CleanTextField, LenientDateField, money


class MedicationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=32)
    category = serializers.CharField(max_length=64)
    unit = serializers.CharField(max_length=32)
    stock = serializers.IntegerField(min_value=0, required=False)
    minStock = serializers.IntegerField(min_value=0, required=False)
    price = money(min_value=0)


class MedicationQuerySerializer(serializers.Serializer):
    category = serializers.CharField(max_length=64, required=False)
    lowStock = serializers.BooleanField(required=False, default=False)


class PrescriptionSerializer(serializers.Serializer):
    medicalRecordId = serializers.IntegerField(min_value=1)
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    prescriptionDate = LenientDateField()
    status = serializers.ChoiceField(choices=[s for s, _ in Prescription.STATUS_CHOICES], required=False)


class PrescriptionItemSerializer(serializers.Serializer):
    medicationId = serializers.IntegerField(min_value=1)
    dosage = serializers.CharField(max_length=64)
    frequency = serializers.CharField(max_length=64)
    duration = serializers.CharField(max_length=64)
    instructions = CleanTextField()
    quantity = serializers.IntegerField(min_value=1)


class PrescriptionCreateSerializer(serializers.Serializer):
    prescription = PrescriptionSerializer()
    items = PrescriptionItemSerializer(many=True, allow_empty=False)
