"""
Django admin registrations.

Minimal configuration so that superusers can inspect data at
``/admin/``.  Bed and admission status should normally be changed
through the API, which keeps them consistent.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    Appointment,
    AuditEvent,
    Bed,
    Billing,
    BillingItem,
    Department,
    Doctor,
    DoctorSchedule,
    InpatientAdmission,
    InsuranceProvider,
    LabRequest,
    LabResult,
    LabTest,
    MedicalRecord,
    Medication,
    Patient,
    PatientInsurance,
    Prescription,
    PrescriptionItem,
    Room,
    User,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    fieldsets = BaseUserAdmin.fieldsets + (("Hospital", {"fields": ("role", "phone")}),)
    list_display = ("username", "first_name", "role", "is_active")
    list_filter = ("role", "is_active")


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("medical_record_number", "name", "gender", "birth_date")
    search_fields = ("medical_record_number", "name", "identity_number", "insurance_number")


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "category", "stock", "min_stock", "price")
    list_filter = ("category",)


class BedInline(admin.TabularInline):
    model = Bed
    extra = 0


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "ward_name", "room_type", "bed_count")
    inlines = [BedInline]


@admin.register(InpatientAdmission)
class InpatientAdmissionAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "bed", "admission_date", "status")
    list_filter = ("status",)


class BillingItemInline(admin.TabularInline):
    model = BillingItem
    extra = 0


@admin.register(Billing)
class BillingAdmin(admin.ModelAdmin):
    list_display = ("invoice_number", "patient", "bill_date", "total_amount", "paid_amount", "status")
    list_filter = ("status", "bill_type")
    inlines = [BillingItemInline]


class PrescriptionItemInline(admin.TabularInline):
    model = PrescriptionItem
    extra = 0


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "doctor", "prescription_date", "status")
    inlines = [PrescriptionItemInline]


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ("created_at", "action", "object_type", "object_id", "user")
    list_filter = ("action",)


admin.site.register(Department)
admin.site.register(Doctor)
admin.site.register(DoctorSchedule)
admin.site.register(Appointment)
admin.site.register(MedicalRecord)
admin.site.register(LabTest)
admin.site.register(LabRequest)
admin.site.register(LabResult)
admin.site.register(InsuranceProvider)
admin.site.register(PatientInsurance)
