"""
Sample hospital used by ``manage.py populate_data`` and by a seeded
in-memory backend.  Writes go straight to the storage; nothing here is
audited.
"""
from __future__ import annotations

import logging
from datetime import date, time, timedelta
from decimal import Decimal

from django.utils import timezone

from hospital.storage import Storage

logger = logging.getLogger(__name__)

INSURANCE_PROVIDERS = [
    ('bpjs', {'name': 'BPJS Kesehatan', 'code': 'BPJS', 'type': 'government',
              'contact': 'Pusat Layanan Informasi BPJS', 'email': 'info@bpjs-kesehatan.go.id', 'phone': '1500400',
              'address': 'Jl. Gatot Subroto No.80, Jakarta', 'apiEndpoint': 'https://api.bpjs-kesehatan.go.id/v2',
              'status': 'active'}),
    ('prudential', {'name': 'Prudential Indonesia', 'code': 'PRUD', 'type': 'private',
                    'contact': 'Customer Service Prudential', 'email': 'customer.service@prudential.co.id',
                    'phone': '1500085', 'address': 'Prudential Tower, Jl. Jend. Sudirman Kav. 79, Jakarta',
                    'apiEndpoint': 'https://api.prudential.co.id/partner', 'status': 'active'}),
    ('allianz', {'name': 'Allianz Indonesia', 'code': 'ALIZ', 'type': 'private', 'contact': 'Allianz Care',
                 'email': 'contact.center@allianz.co.id', 'phone': '1500136',
                 'address': 'Allianz Tower, Jl. HR Rasuna Said, Jakarta',
                 'apiEndpoint': 'https://api.allianz.co.id/v1', 'status': 'inactive'}),
    ('axa', {'name': 'AXA Mandiri', 'code': 'AXAM', 'type': 'private', 'contact': 'AXA Mandiri Contact Center',
             'email': 'customer.service@axa-mandiri.co.id', 'phone': '1500803',
             'address': 'AXA Tower, Jl. Prof. Dr. Satrio Kav. 18, Jakarta',
             'apiEndpoint': 'https://api.axa-mandiri.co.id/services', 'status': 'active'}),
    ('inhealth', {'name': 'Mandiri Inhealth', 'code': 'MINH', 'type': 'private',
                  'contact': 'Mandiri Inhealth Contact Center', 'email': 'customer.service@mandiriinhealth.co.id',
                  'phone': '1500822', 'address': 'Menara Palma, Jl. HR Rasuna Said Blok X2 Kav. 6, Jakarta',
                  'apiEndpoint': 'https://api.mandiriinhealth.co.id/rest', 'status': 'pending'}),
]

# (key, name, code, description, doctor name, specialization, license)
CLINICS = [
    ('general', 'Poli Umum', 'UMUM', 'General Outpatient Department', 'Dr. Suparman', 'General Practice', 'GP123456'),
    ('cardiology', 'Poli Jantung', 'JNTG', 'Cardiology Department', 'Dr. Pratiwi', 'Cardiology', 'CD123456'),
    ('pediatric', 'Poli Anak', 'ANAK', 'Pediatric Department', 'Dr. Widya', 'Pediatrics', 'PD123456'),
    ('dental', 'Poli Gigi', 'GIGI', 'Dental Department', 'Dr. Hartono', 'Dentistry', 'DT123456'),
]

# Mon/Wed/Fri mornings, Tue/Thu afternoons
WEEKLY_SLOTS = [
    (1, time(8), time(12), 20),
    (3, time(8), time(12), 20),
    (5, time(8), time(12), 20),
    (2, time(13), time(17), 15),
    (4, time(13), time(17), 15),
]

PATIENTS = [
    {'medicalRecordNumber': 'MRN00001', 'name': 'Siti Nurhaliza', 'gender': 'female', 'birthDate': date(1990, 5, 15),
     'address': 'Jl. Merdeka No. 123, Jakarta', 'phone': '081234567890', 'email': 'siti@email.com',
     'identityNumber': '1234567890123456', 'insuranceNumber': 'BPJS123456789', 'insuranceProvider': 'BPJS',
     'bloodType': 'O', 'rhesus': 'positive', 'allergies': 'None'},
    {'medicalRecordNumber': 'MRN00002', 'name': 'Budi Santoso', 'gender': 'male', 'birthDate': date(1985, 8, 21),
     'address': 'Jl. Pahlawan No. 45, Surabaya', 'phone': '081234567891', 'email': 'budi@email.com',
     'identityNumber': '1234567890123457', 'bloodType': 'A', 'rhesus': 'positive', 'allergies': 'Penicillin'},
    {'medicalRecordNumber': 'MRN00003', 'name': 'Sri Mulyani', 'gender': 'female', 'birthDate': date(1975, 10, 30),
     'address': 'Jl. Sudirman No. 78, Bandung', 'phone': '081234567892', 'email': 'sri@email.com',
     'identityNumber': '1234567890123458', 'insuranceNumber': 'INS987654321', 'insuranceProvider': 'Prudential',
     'bloodType': 'B', 'rhesus': 'negative', 'allergies': 'Sulfa, Dairy'},
    {'medicalRecordNumber': 'MRN00004', 'name': 'Ahmad Dhani', 'gender': 'male', 'birthDate': date(1980, 12, 5),
     'address': 'Jl. Gatot Subroto No. 12, Semarang', 'phone': '081234567893', 'email': 'ahmad@email.com',
     'identityNumber': '1234567890123459', 'insuranceNumber': 'BPJS987654321', 'insuranceProvider': 'BPJS',
     'bloodType': 'AB', 'rhesus': 'positive', 'allergies': 'None'},
    {'medicalRecordNumber': 'MRN00005', 'name': 'Dewi Fortuna', 'gender': 'female', 'birthDate': date(1995, 3, 25),
     'address': 'Jl. Diponegoro No. 56, Yogyakarta', 'phone': '081234567894', 'email': 'dewi@email.com',
     'identityNumber': '1234567890123460', 'bloodType': 'O', 'rhesus': 'positive', 'allergies': 'Shellfish'},
]

# (patient index, provider key, member, policy, start, end, coverage type, limit)
PATIENT_INSURANCES = [
    (0, 'bpjs', 'BPJS123456789', None, date(2019, 1, 1), date(2030, 12, 31), 'Full', None),
    (2, 'prudential', 'INS987654321', 'POL-123456', date(2020, 5, 15), date(2025, 5, 14), 'Premium',
     Decimal('500000000')),
    (3, 'bpjs', 'BPJS987654321', None, date(2018, 3, 10), date(2030, 12, 31), 'Full', None),
]

MEDICATIONS = [
    {'name': 'Paracetamol', 'code': 'PARA500', 'category': 'Analgesic', 'unit': 'Tablet',
     'stock': 1000, 'minStock': 100, 'price': Decimal('5000')},
    {'name': 'Amoxicillin', 'code': 'AMOX500', 'category': 'Antibiotic', 'unit': 'Capsule',
     'stock': 500, 'minStock': 50, 'price': Decimal('15000')},
    {'name': 'Omeprazole', 'code': 'OMEP20', 'category': 'Antacid', 'unit': 'Capsule',
     'stock': 300, 'minStock': 30, 'price': Decimal('10000')},
    {'name': 'Amlodipine', 'code': 'AMLO5', 'category': 'Antihypertensive', 'unit': 'Tablet',
     'stock': 200, 'minStock': 20, 'price': Decimal('20000')},
]

LAB_TESTS = [
    {'name': 'Complete Blood Count', 'code': 'CBC', 'description': 'Measures different components of blood',
     'price': Decimal('150000')},
    {'name': 'Blood Glucose', 'code': 'GLU', 'description': 'Measures blood sugar level', 'price': Decimal('100000')},
    {'name': 'Lipid Profile', 'code': 'LIPID', 'description': 'Measures cholesterol levels',
     'price': Decimal('200000')},
    {'name': 'Liver Function Test', 'code': 'LFT', 'description': 'Assesses liver function',
     'price': Decimal('250000')},
]

ROOMS = [
    {'roomNumber': 'R101', 'wardName': 'General Ward', 'roomType': 'regular', 'bedCount': 4,
     'costPerDay': Decimal('500000')},
    {'roomNumber': 'R102', 'wardName': 'General Ward', 'roomType': 'regular', 'bedCount': 4,
     'costPerDay': Decimal('500000')},
    {'roomNumber': 'V201', 'wardName': 'VIP Ward', 'roomType': 'vip', 'bedCount': 1,
     'costPerDay': Decimal('1500000')},
    {'roomNumber': 'ICU01', 'wardName': 'Intensive Care Unit', 'roomType': 'icu', 'bedCount': 1,
     'costPerDay': Decimal('3000000')},
]

# (patient index, clinic key, day offset, time, status, notes)
APPOINTMENTS = [
    (2, 'general', 0, time(14, 30), 'confirmed', 'Regular check-up'),
    (0, 'cardiology', 0, time(15, 0), 'pending', 'Chest pain evaluation'),
    (3, 'dental', 1, time(9, 0), 'confirmed', 'Dental cleaning'),
    (4, 'pediatric', 1, time(10, 30), 'confirmed', 'Fever follow-up'),
]


def seed_sample_data(storage: Storage) -> bool:
    """Create the sample hospital unless departments already exist.

    Returns ``True`` when data was written.
    """
    if storage.count('department'):
        logger.info('sample data already present, skipping')
        return False

    today = timezone.localdate()
    with storage.atomic():
        providers = {}
        for key, data in INSURANCE_PROVIDERS:
            synced = today if data['status'] == 'active' else None
            providers[key] = storage.create('insurance_provider', {**data, 'lastSyncDate': synced})['id']

        departments, doctors = {}, {}
        for key, name, code, description, doctor, specialization, license_number in CLINICS:
            departments[key] = storage.create('department', {
                'name': name, 'code': code, 'description': description,
            })['id']
            slug = doctor.split()[-1].lower()
            doctors[key] = storage.create('doctor', {
                'name': doctor,
                'specialization': specialization,
                'licenseNumber': license_number,
                'departmentId': departments[key],
                'email': f'{slug}@hospital.com',
                'phone': f'123-456-789{len(doctors) + 1}',
            })['id']
            for day, start, end, max_patients in WEEKLY_SLOTS:
                storage.create('doctor_schedule', {
                    'doctorId': doctors[key], 'departmentId': departments[key], 'dayOfWeek': day,
                    'startTime': start, 'endTime': end, 'maxPatients': max_patients,
                })

        patients = [storage.create('patient', data)['id'] for data in PATIENTS]
        for idx, provider, member, policy, start, end, coverage, limit in PATIENT_INSURANCES:
            storage.create('patient_insurance', {
                'patientId': patients[idx], 'insuranceProviderId': providers[provider], 'memberNumber': member,
                'policyNumber': policy, 'startDate': start, 'endDate': end, 'coverageType': coverage,
                'coverageLimit': limit, 'status': 'active',
            })

        for data in MEDICATIONS:
            storage.create('medication', data)
        for data in LAB_TESTS:
            storage.create('lab_test', data)
        for data in ROOMS:
            room = storage.create('room', data)
            for n in range(1, room['bedCount'] + 1):
                storage.create('bed', {'roomId': room['id'], 'bedNumber': f"{room['roomNumber']}-{n}",
                                       'status': 'available'})

        for idx, clinic, offset, at, status, notes in APPOINTMENTS:
            storage.create('appointment', {
                'patientId': patients[idx], 'doctorId': doctors[clinic], 'departmentId': departments[clinic],
                'appointmentDate': today + timedelta(days=offset), 'appointmentTime': at,
                'status': status, 'notes': notes,
            })

    logger.info('seeded sample hospital into %s storage', storage.name)
    return True
