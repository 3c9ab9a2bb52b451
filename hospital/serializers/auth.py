from rest_framework import serializers

from hospital.models import User


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class UserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True)
    name = serializers.CharField(max_length=150)
    role = serializers.ChoiceField(choices=[r for r, _ in User.ROLE_CHOICES])
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_username(self, v):
        v = v.strip()
        if User.objects.filter(username=v).exists():
            raise serializers.ValidationError('Username already exists')
        return v


def user_payload(user: User) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'name': user.get_full_name() or user.username,
        'role': user.role,
        'email': user.email,
        'phone': user.phone,
    }
