"""
Integration tests for the registration, scheduling, medical record and
laboratory endpoints.  Uses DRF's APIClient inside APITestCase, with the
sample hospital loaded through the database storage.
"""
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import AuditEvent, User
from ..services.seed import seed_sample_data
from ..storage import DatabaseStorage, set_storage


class HospitalAPITests(APITestCase):
    def setUp(self) -> None:
        self.storage = DatabaseStorage()
        seed_sample_data(self.storage)
        set_storage(self.storage)
        self.admin_user = User.objects.create_user(username='admin', password='P@ssw0rd1', role='admin')
        self.registration_user = User.objects.create_user(username='loket', password='P@ssw0rd1', role='registration')
        self.doctor = self.storage.list('doctor', licenseNumber='GP123456')[0]
        self.patient = self.storage.list('patient', medicalRecordNumber='MRN00001')[0]

    def tearDown(self) -> None:
        set_storage(None)

    def authenticate(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def _medical_record(self, client):
        return client.post('/api/medical-records', {
            'patientId': self.patient['id'],
            'doctorId': self.doctor['id'],
            'departmentId': self.doctor['departmentId'],
            'visitDate': timezone.localdate().isoformat(),
            'visitType': 'outpatient',
            'chiefComplaint': '<b>Demam</b> tiga hari',
            'diagnosis': 'Febris',
            'vitalSigns': {'temperature': 38.5, 'pulse': 92},
        }, format='json')

    # ------------------------------------------------------------------
    # patients
    # ------------------------------------------------------------------
    def test_unauthenticated_requests_are_rejected(self):
        response = APIClient().get('/api/patients')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_patient_search(self):
        client = self.authenticate(self.registration_user)
        names = [p['name'] for p in client.get('/api/patients?query=budi').data]
        self.assertEqual(names, ['Budi Santoso'])
        by_mrn = client.get('/api/patients?query=MRN00003').data
        self.assertEqual([p['name'] for p in by_mrn], ['Sri Mulyani'])
        by_insurance = client.get('/api/patients?query=BPJS9876').data
        self.assertEqual([p['name'] for p in by_insurance], ['Ahmad Dhani'])
        self.assertEqual(len(client.get('/api/patients').data), 5)

    def test_register_patient_generates_mrn(self):
        client = self.authenticate(self.registration_user)
        response = client.post('/api/patients', {
            'name': 'Rina Wijaya', 'gender': 'female', 'birthDate': '2001-02-03',
            'address': 'Jl. Kenanga No. 1, Bogor',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['medicalRecordNumber'], 'MRN00006')
        self.assertTrue(AuditEvent.objects.filter(action='patient_create', object_id=response.data['id']).exists())

        duplicate = client.post('/api/patients', {
            'medicalRecordNumber': 'MRN00001', 'name': 'Someone Else', 'gender': 'male', 'birthDate': '1999-01-01',
        }, format='json')
        self.assertEqual(duplicate.status_code, status.HTTP_409_CONFLICT)

    def test_update_patient(self):
        client = self.authenticate(self.registration_user)
        response = client.put(f"/api/patients/{self.patient['id']}", {'phone': '0811111111'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['phone'], '0811111111')
        self.assertEqual(response.data['name'], 'Siti Nurhaliza')
        self.assertEqual(client.get('/api/patients/9999').status_code, status.HTTP_404_NOT_FOUND)

    def test_patient_insurances(self):
        client = self.authenticate(self.registration_user)
        rows = client.get(f"/api/patients/{self.patient['id']}/insurances").data
        self.assertEqual([r['insuranceProvider']['code'] for r in rows], ['BPJS'])

        budi = self.storage.list('patient', medicalRecordNumber='MRN00002')[0]
        allianz = self.storage.list('insurance_provider', code='ALIZ')[0]
        response = client.post(f"/api/patients/{budi['id']}/insurances", {
            'insuranceProviderId': allianz['id'], 'memberNumber': 'AZ-0001',
            'startDate': '2024-01-01', 'endDate': '2023-01-01',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = client.post(f"/api/patients/{budi['id']}/insurances", {
            'insuranceProviderId': allianz['id'], 'memberNumber': 'AZ-0001',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'active')

    def test_active_insurance_providers(self):
        client = self.authenticate(self.registration_user)
        self.assertEqual(len(client.get('/api/insurance-providers').data), 5)
        active = client.get('/api/insurance-providers?active=true').data
        self.assertEqual(sorted(p['code'] for p in active), ['AXAM', 'BPJS', 'PRUD'])

    # ------------------------------------------------------------------
    # departments, doctors, appointments
    # ------------------------------------------------------------------
    def test_doctors_by_department_and_schedules(self):
        client = self.authenticate(self.registration_user)
        self.assertEqual(len(client.get('/api/departments').data), 4)
        doctors = client.get(f"/api/doctors?departmentId={self.doctor['departmentId']}").data
        self.assertEqual([d['name'] for d in doctors], ['Dr. Suparman'])
        schedules = client.get(f"/api/doctors/{self.doctor['id']}/schedules").data
        self.assertEqual([s['dayOfWeek'] for s in schedules], [1, 2, 3, 4, 5])
        self.assertEqual(client.get('/api/doctors?departmentId=abc').status_code, status.HTTP_400_BAD_REQUEST)

    def test_appointment_filters(self):
        client = self.authenticate(self.registration_user)
        today = client.get('/api/appointments?today=true').data
        self.assertEqual([str(a['appointmentTime']) for a in today], ['14:30:00', '15:00:00'])
        upcoming = client.get('/api/appointments?upcoming=true').data
        self.assertEqual(len(upcoming), 4)
        mine = client.get(f"/api/appointments?doctorId={self.doctor['id']}").data
        self.assertEqual(len(mine), 1)

    def test_create_appointment_checks_references(self):
        client = self.authenticate(self.registration_user)
        payload = {
            'patientId': self.patient['id'], 'doctorId': 9999, 'departmentId': self.doctor['departmentId'],
            'appointmentDate': timezone.localdate().isoformat(), 'appointmentTime': '09:00',
        }
        response = client.post('/api/appointments', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('doctorId', response.data['error']['message'])

        payload['doctorId'] = self.doctor['id']
        response = client.post('/api/appointments', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        response = client.put(f"/api/appointments/{response.data['id']}", {'status': 'confirmed'}, format='json')
        self.assertEqual(response.data['status'], 'confirmed')

    # ------------------------------------------------------------------
    # medical records & laboratory
    # ------------------------------------------------------------------
    def test_medical_record_strips_markup(self):
        client = self.authenticate(self.admin_user)
        response = self._medical_record(client)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['chiefComplaint'], 'Demam tiga hari')
        self.assertEqual(response.data['vitalSigns']['pulse'], 92)
        self.assertEqual(client.get('/api/medical-records').status_code, status.HTTP_400_BAD_REQUEST)
        records = client.get(f"/api/medical-records?patientId={self.patient['id']}").data
        self.assertEqual(len(records), 1)

    def test_lab_request_completes_when_all_results_recorded(self):
        client = self.authenticate(self.admin_user)
        record = self._medical_record(client).data
        cbc = self.storage.list('lab_test', code='CBC')[0]
        glu = self.storage.list('lab_test', code='GLU')[0]
        request = client.post('/api/lab-requests', {
            'request': {'patientId': self.patient['id'], 'doctorId': self.doctor['id'],
                        'medicalRecordId': record['id'], 'requestDate': timezone.localdate().isoformat()},
            'items': [{'labTestId': cbc['id']}, {'labTestId': glu['id']}],
        }, format='json')
        self.assertEqual(request.status_code, status.HTTP_201_CREATED)
        request_id = request.data['id']

        def result(test, value):
            return client.post('/api/lab-results', {
                'labRequestId': request_id, 'labTestId': test['id'], 'result': value, 'unit': 'mg/dL',
                'flag': 'normal', 'performedById': self.admin_user.id,
                'performedDate': timezone.localdate().isoformat(),
            }, format='json')

        self.assertEqual(result(cbc, 'Normal').status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.storage.get('lab_request', request_id)['status'], 'pending')
        glucose = result(glu, '98')
        self.assertEqual(self.storage.get('lab_request', request_id)['status'], 'completed')

        detail = client.get(f'/api/lab-requests/{request_id}').data
        self.assertEqual([i['labTest']['code'] for i in detail['items']], ['CBC', 'GLU'])
        self.assertEqual(detail['items'][1]['results'][0]['result'], '98')

        verified = client.put(f"/api/lab-results/{glucose.data['id']}", {'verified': True}, format='json')
        self.assertEqual(verified.status_code, status.HTTP_200_OK)
        self.assertTrue(verified.data['verified'])
        self.assertEqual(verified.data['verifiedById'], self.admin_user.id)
        self.assertIsNotNone(verified.data['verifiedDate'])

        activities = client.get('/api/dashboard/recent-activities').data
        self.assertIn('Pemeriksaan Lab Blood Glucose', [a['activity'] for a in activities])

    def test_lab_listing_requires_patient(self):
        client = self.authenticate(self.admin_user)
        self.assertEqual(client.get('/api/lab-requests').status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(len(client.get('/api/lab-tests').data), 4)

    # ------------------------------------------------------------------
    # staff accounts
    # ------------------------------------------------------------------
    def test_only_admin_manages_users(self):
        response = self.authenticate(self.registration_user).get('/api/users')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        client = self.authenticate(self.admin_user)
        response = client.post('/api/users', {'username': 'apoteker', 'password': 'rahasia123',
                                               'name': 'Apoteker Satu', 'role': 'pharmacist'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'pharmacist')
        self.assertTrue(User.objects.get(username='apoteker').check_password('rahasia123'))
        self.assertEqual(len(client.get('/api/users').data), 3)
