import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.utils import timezone

from hospital.exceptions import Conflict
from hospital.services import pharmacy
from hospital.services.pharmacy import is_low_stock

pytestmark = pytest.mark.django_db


def _medical_record(storage):
    patient = storage.list('patient')[0]
    doctor = storage.list('doctor')[0]
    record = storage.create('medical_record', {
        'patientId': patient['id'], 'doctorId': doctor['id'], 'departmentId': doctor['departmentId'],
        'visitDate': timezone.localdate(), 'visitType': 'outpatient', 'diagnosis': 'Fever',
    })
    return record


def _med(storage, code):
    return storage.list('medication', code=code)[0]


def _payload(record, *items):
    return {
        'prescription': {
            'medicalRecordId': record['id'],
            'patientId': record['patientId'],
            'doctorId': record['doctorId'],
            'prescriptionDate': timezone.localdate().isoformat(),
        },
        'items': [
            {'medicationId': med['id'], 'dosage': '500mg', 'frequency': '3x1', 'duration': '5 days',
             'quantity': qty}
            for med, qty in items
        ],
    }


@pytest.mark.parametrize('stock,min_stock,low', [(5, 10, True), (10, 10, True), (11, 10, False), (0, 0, True)])
def test_low_stock_boundary(stock, min_stock, low):
    assert is_low_stock({'stock': stock, 'minStock': min_stock}) is low


def test_prescription_decrements_stock(api, any_storage):
    record = _medical_record(any_storage)
    para, amox = _med(any_storage, 'PARA500'), _med(any_storage, 'AMOX500')

    r = api.post('/api/prescriptions', _payload(record, (para, 15), (amox, 10)), format='json')
    assert r.status_code == 201
    assert len(r.data['items']) == 2
    assert _med(any_storage, 'PARA500')['stock'] == para['stock'] - 15
    assert _med(any_storage, 'AMOX500')['stock'] == amox['stock'] - 10


def test_insufficient_stock_rejects_whole_prescription(api, any_storage):
    record = _medical_record(any_storage)
    para, amlo = _med(any_storage, 'PARA500'), _med(any_storage, 'AMLO5')

    r = api.post('/api/prescriptions', _payload(record, (para, 15), (amlo, amlo['stock'] + 1)), format='json')
    assert r.status_code == 409
    assert 'Amlodipine' in r.data['error']['message']
    assert _med(any_storage, 'PARA500')['stock'] == para['stock']
    assert any_storage.count('prescription') == 0
    assert any_storage.count('prescription_item') == 0


def test_exact_stock_can_be_dispensed(api, seeded):
    record = _medical_record(seeded)
    amlo = _med(seeded, 'AMLO5')
    r = api.post('/api/prescriptions', _payload(record, (amlo, amlo['stock'])), format='json')
    assert r.status_code == 201
    assert _med(seeded, 'AMLO5')['stock'] == 0


def test_prescription_validation(api, seeded):
    record = _medical_record(seeded)
    para = _med(seeded, 'PARA500')
    assert api.post('/api/prescriptions', _payload(record, (para, 0)), format='json').status_code == 400
    assert api.post('/api/prescriptions', _payload(record), format='json').status_code == 400
    r = api.post('/api/prescriptions', _payload(record, ({'id': 9999}, 1)), format='json')
    assert r.status_code == 400
    assert 'medicationId' in r.data['error']['message']


def test_prescription_detail_and_listing(api, seeded):
    record = _medical_record(seeded)
    para = _med(seeded, 'PARA500')
    created = api.post('/api/prescriptions', _payload(record, (para, 2)), format='json').data

    r = api.get(f"/api/prescriptions/{created['id']}")
    assert r.status_code == 200
    assert r.data['items'][0]['medication']['code'] == 'PARA500'
    assert api.get('/api/prescriptions').status_code == 400
    assert len(api.get(f"/api/prescriptions?patientId={record['patientId']}").data) == 1

    r = api.put(f"/api/prescriptions/{created['id']}", {'status': 'completed'}, format='json')
    assert r.data['status'] == 'completed'


def test_low_stock_query(api, any_storage):
    any_storage.update('medication', _med(any_storage, 'OMEP20')['id'], {'stock': 30})   # == minStock
    any_storage.update('medication', _med(any_storage, 'AMLO5')['id'], {'stock': 3})     # below
    any_storage.update('medication', _med(any_storage, 'AMOX500')['id'], {'stock': 51})  # just above

    r = api.get('/api/medications?lowStock=true')
    assert r.status_code == 200
    assert sorted(m['code'] for m in r.data) == ['AMLO5', 'OMEP20']
    assert all(m['stock'] <= m['minStock'] for m in r.data)
    assert len(api.get('/api/medications').data) == 4


def test_medication_crud(api, seeded):
    r = api.post('/api/medications', {'name': 'Cetirizine', 'code': 'CETI10', 'category': 'Antihistamine',
                                      'unit': 'Tablet', 'stock': 40, 'minStock': 10, 'price': '7500'},
                 format='json')
    assert r.status_code == 201
    r = api.put(f"/api/medications/{r.data['id']}", {'stock': 100}, format='json')
    assert r.data['stock'] == 100
    assert [m['code'] for m in api.get('/api/medications?category=Antihistamine').data] == ['CETI10']


def test_cashier_cannot_write_medications(seeded, django_user_model):
    from rest_framework.test import APIClient
    cashier = django_user_model.objects.create_user(username='kasir', password='x', role='cashier')
    client = APIClient()
    client.force_authenticate(user=cashier)
    assert client.get('/api/medications').status_code == 200
    r = client.post('/api/medications', {'name': 'X', 'code': 'X', 'category': 'X', 'unit': 'X', 'price': '1'},
                    format='json')
    assert r.status_code == 403


def test_concurrent_prescriptions_never_overdraw_stock(mem_storage, monkeypatch):
    monkeypatch.setattr('hospital.services.pharmacy.log_action', lambda **kwargs: None)
    record = _medical_record(mem_storage)
    amlo = _med(mem_storage, 'AMLO5')
    quantity = amlo['stock'] // 2 + 1
    start = threading.Barrier(4)

    def prescribe(_):
        start.wait()
        try:
            return pharmacy.create_prescription(mem_storage, {
                'medicalRecordId': record['id'],
                'patientId': record['patientId'],
                'doctorId': record['doctorId'],
                'prescriptionDate': timezone.localdate(),
            }, [{'medicationId': amlo['id'], 'dosage': '5mg', 'frequency': '1x1', 'duration': '30 days',
                 'quantity': quantity}])
        except Conflict as exc:
            return exc

    with ThreadPoolExecutor(max_workers=4) as pool:
        outcomes = list(pool.map(prescribe, range(4)))

    assert sum(isinstance(o, dict) for o in outcomes) == 1
    assert sum(isinstance(o, Conflict) for o in outcomes) == 3
    assert _med(mem_storage, 'AMLO5')['stock'] == amlo['stock'] - quantity >= 0
    assert mem_storage.count('prescription') == 1
    assert mem_storage.count('prescription_item') == 1
