import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from hospital.models import User

pytestmark = pytest.mark.django_db


def login(client, username, password):
    r = client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')
    assert r.status_code in (200, 400)
    return r


def test_no_role_bypass_in_login():
    client = APIClient()
    u = User.objects.create_user(username='u1', password='P@ssw0rd1', role='registration')
    r = client.post(reverse('login_view'), {'username': 'u1', 'password': 'P@ssw0rd1', 'role': 'admin'}, format='json')
    assert r.status_code == 200
    assert r.data['user']['role'] == 'registration'
    u.refresh_from_db()
    assert u.role == 'registration'


def test_wrong_password_is_rejected():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    r = login(APIClient(), 'u1', 'nope')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'invalid_credentials'


def test_login_returns_jwt_and_legacy_token():
    client = APIClient()
    User.objects.create_user(username='u_jwt', password='P@ssw0rd1', role='doctor')
    r = login(client, 'u_jwt', 'P@ssw0rd1')
    assert r.status_code == 200
    assert r.data['access'] and r.data['refresh'] and r.data['token']


def test_both_token_kinds_authenticate():
    User.objects.create_user(username='u1', password='P@ssw0rd1', role='nurse')
    data = login(APIClient(), 'u1', 'P@ssw0rd1').data

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Token {data['token']}")
    assert client.get(reverse('me_view')).data['username'] == 'u1'

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['access']}")
    assert client.get(reverse('me_view')).data['role'] == 'nurse'


def test_refresh_and_logout_blacklists_refresh_token():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    data = login(APIClient(), 'u1', 'P@ssw0rd1').data

    r = APIClient().post(reverse('token_refresh'), {'refresh': data['refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['access']
    # rotation blacklists the used refresh token and hands out a new one
    refresh = r.data['refresh']

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['access']}")
    r = client.post(reverse('logout_view'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert r.data['blacklisted'] == 1

    r = APIClient().post(reverse('token_refresh'), {'refresh': refresh}, format='json')
    assert r.status_code == 401


def test_logout_revokes_drf_token():
    User.objects.create_user(username='u1', password='P@ssw0rd1')
    token = login(APIClient(), 'u1', 'P@ssw0rd1').data['token']
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Token {token}')
    assert client.post(reverse('logout_view'), {}, format='json').status_code == 200
    assert client.get(reverse('me_view')).status_code == 401


def test_healthz_is_public():
    r = APIClient().get('/healthz')
    assert r.status_code == 200
    assert r.json()['ok'] is True
