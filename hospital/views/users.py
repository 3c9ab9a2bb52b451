"""Staff account management (admin only)."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.models import User
from hospital.permissions import IsAdminRole
from hospital.serializers.auth import UserCreateSerializer, user_payload
from hospital.services.audit import log_action


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users(request):
    if request.method == 'POST':
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        user = User.objects.create_user(
            username=vd['username'],
            password=vd['password'],
            first_name=vd['name'],
            email=vd.get('email', ''),
            role=vd['role'],
            phone=vd.get('phone', ''),
        )
        log_action(user=request.user, action='user_create', object_type='user', object_id=user.id,
                   detail={'role': user.role})
        return Response(user_payload(user), status=status.HTTP_201_CREATED)
    return Response([user_payload(u) for u in User.objects.order_by('id')])
