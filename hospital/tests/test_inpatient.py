import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.utils import timezone

from hospital.exceptions import Conflict
from hospital.models import AuditEvent
from hospital.services import inpatient

pytestmark = pytest.mark.django_db


def _ids(storage):
    patients = storage.list('patient')
    doctor = storage.list('doctor')[0]
    return patients, doctor


def _bed(storage, number):
    return storage.list('bed', bedNumber=number)[0]


def _admit(api, patient, doctor, bed, **extra):
    payload = {
        'patientId': patient['id'],
        'doctorId': doctor['id'],
        'bedId': bed['id'],
        'admissionDate': timezone.localdate().isoformat(),
        'admissionTime': '10:00:00',
        'diagnosis': 'Community acquired pneumonia',
        'status': 'active',
        **extra,
    }
    return api.post('/api/inpatient/admissions', payload, format='json')


def _available_numbers(api):
    r = api.get('/api/beds/available')
    assert r.status_code == 200
    return [b['bedNumber'] for b in r.data]


def test_vip_bed_admit_and_discharge_cycle(api, any_storage):
    patients, doctor = _ids(any_storage)
    bed = _bed(any_storage, 'V201-1')
    assert 'V201-1' in _available_numbers(api)

    r = _admit(api, patients[0], doctor, bed)
    assert r.status_code == 201
    assert r.data['status'] == 'active'
    assert any_storage.get('bed', bed['id'])['status'] == 'occupied'
    assert 'V201-1' not in _available_numbers(api)

    r = api.put(f"/api/inpatient/admissions/{r.data['id']}", {'status': 'discharged'}, format='json')
    assert r.status_code == 200
    assert r.data['status'] == 'discharged'
    assert r.data['dischargeDate'] is not None
    assert r.data['dischargeTime'] is not None
    assert any_storage.get('bed', bed['id'])['status'] == 'available'
    assert 'V201-1' in _available_numbers(api)


def test_second_admission_to_occupied_bed_is_rejected(api, any_storage):
    patients, doctor = _ids(any_storage)
    bed = _bed(any_storage, 'V201-1')
    assert _admit(api, patients[0], doctor, bed).status_code == 201

    r = _admit(api, patients[1], doctor, bed)
    assert r.status_code == 409
    assert r.data['error']['code'] == 'conflict'
    assert any_storage.count('admission', bedId=bed['id']) == 1
    assert any_storage.get('bed', bed['id'])['status'] == 'occupied'


def test_bed_under_maintenance_cannot_be_used(api, seeded):
    patients, doctor = _ids(seeded)
    bed = _bed(seeded, 'R101-1')
    seeded.update('bed', bed['id'], {'status': 'maintenance'})
    assert _admit(api, patients[0], doctor, bed).status_code == 409
    assert seeded.count('admission') == 0


def test_client_status_is_ignored_on_admission(api, seeded):
    patients, doctor = _ids(seeded)
    r = _admit(api, patients[0], doctor, _bed(seeded, 'R101-2'), status='discharged')
    assert r.status_code == 201
    assert r.data['status'] == 'active'


def test_missing_references(api, seeded):
    patients, doctor = _ids(seeded)
    r = _admit(api, patients[0], doctor, {'id': 9999})
    assert r.status_code == 404
    r = _admit(api, {'id': 9999}, doctor, _bed(seeded, 'R101-1'))
    assert r.status_code == 400
    assert 'patientId' in r.data['error']['message']
    assert _bed(seeded, 'R101-1')['status'] == 'available'
    r = api.put('/api/inpatient/admissions/9999', {'status': 'discharged'}, format='json')
    assert r.status_code == 404


def test_discharged_admission_cannot_change_status(api, seeded):
    patients, doctor = _ids(seeded)
    admission = _admit(api, patients[0], doctor, _bed(seeded, 'V201-1')).data
    api.put(f"/api/inpatient/admissions/{admission['id']}", {'status': 'discharged'}, format='json')
    r = api.put(f"/api/inpatient/admissions/{admission['id']}", {'status': 'active'}, format='json')
    assert r.status_code == 409
    # unrelated fields can still be corrected
    r = api.put(f"/api/inpatient/admissions/{admission['id']}", {'diagnosis': 'Pneumonia, resolved'}, format='json')
    assert r.status_code == 200


def test_moving_patient_to_another_bed(api, seeded):
    patients, doctor = _ids(seeded)
    old, new = _bed(seeded, 'R101-1'), _bed(seeded, 'R102-1')
    admission = _admit(api, patients[0], doctor, old).data
    r = api.put(f"/api/inpatient/admissions/{admission['id']}", {'bedId': new['id']}, format='json')
    assert r.status_code == 200
    assert r.data['bedId'] == new['id']
    assert seeded.get('bed', old['id'])['status'] == 'available'
    assert seeded.get('bed', new['id'])['status'] == 'occupied'
    assert AuditEvent.objects.filter(action='admission_move', object_id=admission['id']).exists()


def test_transfer_releases_bed(api, seeded):
    patients, doctor = _ids(seeded)
    bed = _bed(seeded, 'ICU01-1')
    admission = _admit(api, patients[0], doctor, bed).data
    r = api.put(f"/api/inpatient/admissions/{admission['id']}",
                {'status': 'transferred', 'dischargeDate': '2030-01-02', 'dischargeTime': '08:30'}, format='json')
    assert r.status_code == 200
    assert r.data['dischargeDate'].isoformat() == '2030-01-02'
    assert seeded.get('bed', bed['id'])['status'] == 'available'


def test_admission_listing_requires_filter(api, seeded):
    patients, doctor = _ids(seeded)
    _admit(api, patients[0], doctor, _bed(seeded, 'R101-1'))
    assert api.get('/api/inpatient/admissions').status_code == 400
    assert len(api.get('/api/inpatient/admissions?active=true').data) == 1
    assert len(api.get(f"/api/inpatient/admissions?patientId={patients[0]['id']}").data) == 1
    assert api.get(f"/api/inpatient/admissions?patientId={patients[1]['id']}").data == []


def test_rooms_and_beds(api, seeded):
    r = api.get('/api/rooms?type=regular')
    assert sorted(room['roomNumber'] for room in r.data) == ['R101', 'R102']
    r101 = seeded.list('room', roomNumber='R101')[0]
    r = api.get(f"/api/rooms/{r101['id']}/beds")
    assert [b['bedNumber'] for b in r.data] == ['R101-1', 'R101-2', 'R101-3', 'R101-4']
    assert api.get('/api/rooms/9999/beds').status_code == 404

    r = api.post('/api/rooms', {'roomNumber': 'V202', 'wardName': 'VIP Ward', 'roomType': 'vip',
                                'bedCount': 2, 'costPerDay': '1500000'}, format='json')
    assert r.status_code == 201
    assert [b['bedNumber'] for b in r.data['beds']] == ['V202-1', 'V202-2']
    assert api.post('/api/rooms', {'roomNumber': 'V202', 'wardName': 'VIP Ward', 'roomType': 'vip',
                                   'bedCount': 1, 'costPerDay': '1'}, format='json').status_code == 409


def test_only_admins_add_rooms(seeded, django_user_model):
    from rest_framework.test import APIClient
    nurse = django_user_model.objects.create_user(username='nurse', password='x', role='nurse')
    client = APIClient()
    client.force_authenticate(user=nurse)
    r = client.post('/api/rooms', {'roomNumber': 'X1', 'wardName': 'X', 'roomType': 'regular',
                                   'bedCount': 1, 'costPerDay': '1'}, format='json')
    assert r.status_code == 403
    assert client.get('/api/rooms').status_code == 200


def test_bed_status_is_broadcast(api, seeded, monkeypatch):
    sent = []
    monkeypatch.setattr('hospital.services.inpatient.publish_bed_status', sent.append)
    patients, doctor = _ids(seeded)
    _admit(api, patients[0], doctor, _bed(seeded, 'V201-1'))
    assert [(b['bedNumber'], b['status']) for b in sent] == [('V201-1', 'occupied')]


def test_concurrent_admissions_to_one_bed(mem_storage, monkeypatch):
    monkeypatch.setattr('hospital.services.inpatient.log_action', lambda **kwargs: None)
    monkeypatch.setattr('hospital.services.inpatient.publish_bed_status', lambda bed: None)
    patients, doctor = _ids(mem_storage)
    bed = _bed(mem_storage, 'V201-1')
    start = threading.Barrier(8)

    def admit(n):
        start.wait()
        try:
            return inpatient.admit_patient(mem_storage, {
                'patientId': patients[n % len(patients)]['id'],
                'doctorId': doctor['id'],
                'bedId': bed['id'],
                'admissionDate': timezone.localdate(),
                'admissionTime': timezone.localtime().time().replace(microsecond=0),
                'diagnosis': 'Dengue fever',
            })
        except Conflict as exc:
            return exc

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(admit, range(8)))

    admitted = [o for o in outcomes if isinstance(o, dict)]
    assert len(admitted) == 1
    assert sum(isinstance(o, Conflict) for o in outcomes) == 7
    assert len(mem_storage.list('admission', bedId=bed['id'])) == 1
    assert _bed(mem_storage, 'V201-1')['status'] == 'occupied'
