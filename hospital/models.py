"""
Database models for the SIMRS backend.

These models capture the core concepts of the hospital: registration
(patients, departments, doctors and their schedules), outpatient
appointments and medical records, pharmacy, laboratory, inpatient
rooms/beds/admissions and billing.  Field names mirror the JSON keys
used by the front-end (``medicalRecordNumber`` <-> ``medical_record_number``)
so that records can be converted mechanically by the storage layer.
"""
from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Staff account with a hospital role.

    Roles mirror the front-end roles.  ``admin`` users may manage other
    accounts and hospital setup data (rooms, medications).
    """
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('doctor', 'Doctor'),
        ('nurse', 'Nurse'),
        ('pharmacist', 'Pharmacist'),
        ('cashier', 'Cashier'),
        ('registration', 'Registration'),
    ]
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default='registration')
    phone = models.CharField(max_length=32, blank=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Department(models.Model):
    """An outpatient clinic ("poli"), e.g. Poli Umum."""
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class Doctor(models.Model):
    name = models.CharField(max_length=255)
    specialization = models.CharField(max_length=255)
    license_number = models.CharField(max_length=64, unique=True)
    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name='doctors')
    email = models.CharField(max_length=255, null=True, blank=True)
    phone = models.CharField(max_length=32, null=True, blank=True)

    def __str__(self) -> str:
        return self.name


class DoctorSchedule(models.Model):
    """Weekly practice slot; ``day_of_week`` 0 = Sunday."""
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='schedules')
    department = models.ForeignKey(Department, on_delete=models.CASCADE, related_name='schedules')
    day_of_week = models.PositiveSmallIntegerField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    max_patients = models.PositiveIntegerField()

    def __str__(self) -> str:
        return f"{self.doctor_id}@{self.day_of_week} {self.start_time}-{self.end_time}"


class Patient(models.Model):
    """A registered patient, identified by the medical record number (MRN)."""
    medical_record_number = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255, db_index=True)
    gender = models.CharField(max_length=16)
    birth_date = models.DateField()
    address = models.TextField(null=True, blank=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    email = models.CharField(max_length=255, null=True, blank=True)
    identity_number = models.CharField(max_length=32, null=True, blank=True)
    insurance_number = models.CharField(max_length=64, null=True, blank=True)
    insurance_provider = models.CharField(max_length=255, null=True, blank=True)
    blood_type = models.CharField(max_length=4, null=True, blank=True)
    rhesus = models.CharField(max_length=16, null=True, blank=True)
    allergies = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.medical_record_number})"


class Appointment(models.Model):
    STATUS_CHOICES = [
        ('confirmed', 'Confirmed'),
        ('pending', 'Pending'),
        ('cancelled', 'Cancelled'),
        ('completed', 'Completed'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='appointments')
    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name='appointments')
    appointment_date = models.DateField(db_index=True)
    appointment_time = models.TimeField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='pending')
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)


class MedicalRecord(models.Model):
    VISIT_TYPE_CHOICES = [
        ('outpatient', 'Outpatient'),
        ('inpatient', 'Inpatient'),
        ('emergency', 'Emergency'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='medical_records')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='medical_records')
    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name='medical_records')
    visit_date = models.DateField(db_index=True)
    visit_type = models.CharField(max_length=16, choices=VISIT_TYPE_CHOICES)
    chief_complaint = models.TextField(null=True, blank=True)
    diagnosis = models.TextField(null=True, blank=True)
    secondary_diagnosis = models.TextField(null=True, blank=True)
    clinical_notes = models.TextField(null=True, blank=True)
    treatment = models.TextField(null=True, blank=True)
    vital_signs = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)


class Medication(models.Model):
    """Pharmacy inventory entry.  ``stock <= min_stock`` means low stock."""
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=32, unique=True)
    category = models.CharField(max_length=64, db_index=True)
    unit = models.CharField(max_length=32)
    stock = models.IntegerField(default=0)
    min_stock = models.IntegerField(default=0)
    price = models.DecimalField(max_digits=10, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class Prescription(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('processing', 'Processing'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]
    medical_record = models.ForeignKey(MedicalRecord, on_delete=models.PROTECT, related_name='prescriptions')
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='prescriptions')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='prescriptions')
    prescription_date = models.DateField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)


class PrescriptionItem(models.Model):
    prescription = models.ForeignKey(Prescription, on_delete=models.CASCADE, related_name='items')
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name='prescription_items')
    dosage = models.CharField(max_length=64)
    frequency = models.CharField(max_length=64)
    duration = models.CharField(max_length=64)
    instructions = models.TextField(null=True, blank=True)
    quantity = models.PositiveIntegerField()


class LabTest(models.Model):
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=32, unique=True)
    description = models.TextField(null=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class LabRequest(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('processing', 'Processing'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='lab_requests')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='lab_requests')
    medical_record = models.ForeignKey(MedicalRecord, on_delete=models.PROTECT, related_name='lab_requests')
    request_date = models.DateField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)


class LabRequestItem(models.Model):
    lab_request = models.ForeignKey(LabRequest, on_delete=models.CASCADE, related_name='items')
    lab_test = models.ForeignKey(LabTest, on_delete=models.PROTECT, related_name='request_items')
    notes = models.TextField(null=True, blank=True)


class LabResult(models.Model):
    lab_request = models.ForeignKey(LabRequest, on_delete=models.CASCADE, related_name='results')
    lab_test = models.ForeignKey(LabTest, on_delete=models.PROTECT, related_name='results')
    result = models.TextField()
    reference_range = models.CharField(max_length=255, null=True, blank=True)
    unit = models.CharField(max_length=32, null=True, blank=True)
    # normal / high / low / critical
    flag = models.CharField(max_length=16, null=True, blank=True)
    performed_by_id = models.PositiveIntegerField()
    performed_date = models.DateField()
    verified = models.BooleanField(default=False)
    verified_by_id = models.PositiveIntegerField(null=True, blank=True)
    verified_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)


class Room(models.Model):
    ROOM_TYPE_CHOICES = [
        ('regular', 'Regular'),
        ('vip', 'VIP'),
        ('icu', 'ICU'),
    ]
    room_number = models.CharField(max_length=32, unique=True)
    ward_name = models.CharField(max_length=255)
    room_type = models.CharField(max_length=16, choices=ROOM_TYPE_CHOICES, db_index=True)
    bed_count = models.PositiveIntegerField()
    cost_per_day = models.DecimalField(max_digits=10, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.room_number} ({self.ward_name})"


class Bed(models.Model):
    """A bed inside a room.  Status only changes through admissions."""
    STATUS_AVAILABLE = 'available'
    STATUS_OCCUPIED = 'occupied'
    STATUS_MAINTENANCE = 'maintenance'
    STATUS_CHOICES = [
        (STATUS_AVAILABLE, 'Available'),
        (STATUS_OCCUPIED, 'Occupied'),
        (STATUS_MAINTENANCE, 'Maintenance'),
    ]
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='beds')
    bed_number = models.CharField(max_length=32)
    # Indexed: the available-bed listing filters on it
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_AVAILABLE, db_index=True)

    class Meta:
        unique_together = [('room', 'bed_number')]

    def __str__(self) -> str:
        return f"{self.bed_number} ({self.status})"


class InpatientAdmission(models.Model):
    STATUS_ACTIVE = 'active'
    STATUS_DISCHARGED = 'discharged'
    STATUS_TRANSFERRED = 'transferred'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_DISCHARGED, 'Discharged'),
        (STATUS_TRANSFERRED, 'Transferred'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='admissions')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='admissions')
    bed = models.ForeignKey(Bed, on_delete=models.PROTECT, related_name='admissions')
    admission_date = models.DateField()
    admission_time = models.TimeField()
    discharge_date = models.DateField(null=True, blank=True)
    discharge_time = models.TimeField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    diagnosis = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'admission_date']),
        ]


class Billing(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_PARTIAL = 'partial'
    STATUS_PAID = 'paid'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PARTIAL, 'Partial'),
        (STATUS_PAID, 'Paid'),
    ]
    BILL_TYPE_CHOICES = [
        ('outpatient', 'Outpatient'),
        ('inpatient', 'Inpatient'),
        ('pharmacy', 'Pharmacy'),
        ('laboratory', 'Laboratory'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='billings')
    invoice_number = models.CharField(max_length=32, unique=True)
    bill_date = models.DateField(db_index=True)
    bill_type = models.CharField(max_length=16, choices=BILL_TYPE_CHOICES)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    # cash / card / insurance
    payment_method = models.CharField(max_length=16, null=True, blank=True)
    insurance_provider = models.CharField(max_length=255, null=True, blank=True)
    insurance_coverage_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.invoice_number} ({self.status})"


class BillingItem(models.Model):
    # consultation / medication / lab / room / procedure
    billing = models.ForeignKey(Billing, on_delete=models.CASCADE, related_name='items')
    item_type = models.CharField(max_length=16)
    item_id = models.PositiveIntegerField()
    description = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)


class InsuranceProvider(models.Model):
    TYPE_CHOICES = [
        ('government', 'Government'),
        ('private', 'Private'),
    ]
    name = models.CharField(max_length=255, unique=True)
    code = models.CharField(max_length=32, unique=True)
    type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    contact = models.CharField(max_length=255, null=True, blank=True)
    email = models.CharField(max_length=255, null=True, blank=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    api_endpoint = models.CharField(max_length=255, null=True, blank=True)
    # active / inactive / pending
    status = models.CharField(max_length=16, default='active')
    last_sync_date = models.DateField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class PatientInsurance(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='insurances')
    insurance_provider = models.ForeignKey(InsuranceProvider, on_delete=models.PROTECT, related_name='members')
    member_number = models.CharField(max_length=64)
    policy_number = models.CharField(max_length=64, null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    coverage_type = models.CharField(max_length=32, null=True, blank=True)
    coverage_limit = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    # active / inactive / expired
    status = models.CharField(max_length=16, default='active')
    created_at = models.DateTimeField(auto_now_add=True)


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at']),
            models.Index(fields=['object_type', 'object_id', 'created_at']),
        ]
