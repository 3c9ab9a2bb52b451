from rest_framework import serializers

from .fields import CleanTextField, LenientDateField, money, optional_char


class PatientSerializer(serializers.Serializer):
    medicalRecordNumber = serializers.CharField(max_length=32, required=False, allow_blank=True)
    name = serializers.CharField(max_length=255)
    gender = serializers.ChoiceField(choices=['male', 'female'])
    birthDate = LenientDateField()
    address = CleanTextField()
    phone = optional_char(32)
    email = optional_char()
    identityNumber = optional_char(32)
    insuranceNumber = optional_char(64)
    insuranceProvider = optional_char()
    bloodType = optional_char(4)
    rhesus = optional_char(16)
    allergies = CleanTextField()

    def validate_name(self, v):
        v = v.strip()
        if len(v) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters')
        return v


class PatientSearchSerializer(serializers.Serializer):
    query = serializers.CharField(max_length=64, required=False, allow_blank=True)


class PatientInsuranceSerializer(serializers.Serializer):
    insuranceProviderId = serializers.IntegerField(min_value=1)
    memberNumber = serializers.CharField(max_length=64)
    policyNumber = optional_char(64)
    startDate = LenientDateField(required=False, allow_null=True)
    endDate = LenientDateField(required=False, allow_null=True)
    coverageType = optional_char(32)
    coverageLimit = money(required=False, allow_null=True, min_value=0)
    status = serializers.ChoiceField(choices=['active', 'inactive', 'expired'], required=False)

    def validate(self, attrs):
        start, end = attrs.get('startDate'), attrs.get('endDate')
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': 'End date is before start date'})
        return attrs
