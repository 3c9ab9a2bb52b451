from rest_framework import serializers

from hospital.models import InpatientAdmission, Room

from .fields import CleanTextField, LenientDateField, money


class RoomSerializer(serializers.Serializer):
    roomNumber = serializers.CharField(max_length=32)
    wardName = serializers.CharField(max_length=255)
    roomType = serializers.ChoiceField(choices=[t for t, _ in Room.ROOM_TYPE_CHOICES])
    bedCount = serializers.IntegerField(min_value=1, max_value=50)
    costPerDay = money(min_value=0)


class RoomQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=[t for t, _ in Room.ROOM_TYPE_CHOICES], required=False)


class AdmissionSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    doctorId = serializers.IntegerField(min_value=1)
    bedId = serializers.IntegerField(min_value=1)
    admissionDate = LenientDateField()
    admissionTime = serializers.TimeField()
    dischargeDate = LenientDateField(required=False, allow_null=True)
    dischargeTime = serializers.TimeField(required=False, allow_null=True)
    # Accepted for compatibility; a new admission is always active.
    status = serializers.ChoiceField(choices=[s for s, _ in InpatientAdmission.STATUS_CHOICES], required=False)
    diagnosis = CleanTextField(required=True, allow_null=False, allow_blank=False)


class AdmissionQuerySerializer(serializers.Serializer):
    active = serializers.BooleanField(required=False, default=False)
    patientId = serializers.IntegerField(min_value=1, required=False)
