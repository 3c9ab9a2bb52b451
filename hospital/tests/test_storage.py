from datetime import date
from decimal import Decimal

import pytest
from rest_framework.exceptions import NotFound

from hospital.exceptions import Conflict
from hospital.storage import DatabaseStorage, MemStorage
from hospital.storage.base import camelize, clean, columns


@pytest.fixture(params=['database', 'memory'])
def storage(request):
    if request.param == 'database':
        request.getfixturevalue('db')
        return DatabaseStorage()
    return MemStorage()


def _medication(code='PARA500', stock=10):
    return {'name': 'Paracetamol', 'code': code, 'category': 'Analgesic', 'unit': 'Tablet',
            'stock': stock, 'minStock': 5, 'price': Decimal('5000')}


def test_camelize_and_columns():
    assert camelize('medical_record_number') == 'medicalRecordNumber'
    assert camelize('patient_id') == 'patientId'
    assert 'minStock' in columns('medication')
    assert 'roomId' in columns('bed')


def test_clean_coerces_and_rejects_unknown_fields():
    values = clean('patient', {'birthDate': '1990-05-15', 'name': 'Siti'})
    assert values['birthDate'] == date(1990, 5, 15)
    with pytest.raises(KeyError):
        clean('patient', {'nickname': 'x'})


def test_create_assigns_ids_and_defaults(storage):
    first = storage.create('medication', _medication())
    second = storage.create('medication', _medication(code='AMOX500'))
    assert second['id'] > first['id']
    room = storage.create('room', {'roomNumber': 'R1', 'wardName': 'Ward', 'roomType': 'regular',
                                   'bedCount': 1, 'costPerDay': Decimal('1')})
    bed = storage.create('bed', {'roomId': room['id'], 'bedNumber': 'R1-1'})
    assert bed['status'] == 'available'
    assert storage.get('medication', first['id'])['code'] == 'PARA500'


def test_list_filters_and_count(storage):
    storage.create('medication', _medication())
    storage.create('medication', {**_medication(code='AMOX500'), 'category': 'Antibiotic'})
    assert [m['code'] for m in storage.list('medication', category='Antibiotic')] == ['AMOX500']
    assert storage.count('medication') == 2
    assert storage.count('medication', category='Analgesic') == 1


def test_unique_field_conflict(storage):
    storage.create('medication', _medication())
    with pytest.raises(Conflict):
        storage.create('medication', _medication())


def test_update_partial_and_missing(storage):
    med = storage.create('medication', _medication())
    updated = storage.update('medication', med['id'], {'stock': 3})
    assert updated['stock'] == 3
    assert updated['name'] == 'Paracetamol'
    with pytest.raises(NotFound):
        storage.update('medication', 9999, {'stock': 1})
    assert storage.get('medication', 9999) is None
    with pytest.raises(NotFound):
        storage.get_or_404('medication', 9999)


def test_atomic_rolls_back_every_write(storage):
    med = storage.create('medication', _medication())
    with pytest.raises(RuntimeError):
        with storage.atomic():
            storage.update('medication', med['id'], {'stock': 0})
            storage.create('medication', _medication(code='AMOX500'))
            raise RuntimeError('boom')
    assert storage.get('medication', med['id'])['stock'] == 10
    assert storage.count('medication') == 1


def test_memory_seed_matches_sample_hospital():
    storage = MemStorage(seed=True)
    assert storage.count('department') == 4
    assert storage.count('patient') == 5
    assert storage.count('bed') == 10
    assert [b['bedNumber'] for b in storage.list('bed', status='available')][-2:] == ['V201-1', 'ICU01-1']
