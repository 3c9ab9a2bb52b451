"""
Dashboard aggregates.

All figures are linear scans over the storage backend.  Results are
cached for ``SIMRS_DASHBOARD_CACHE_TTL`` seconds; every service that
mutates a counted entity calls :func:`invalidate_dashboard`.
"""
from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Callable

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from hospital.storage import Storage

CACHE_KEYS = {
    'stats': 'dashboard:stats',
    'recent-activities': 'dashboard:recent-activities',
    'upcoming-appointments': 'dashboard:upcoming-appointments',
    'hospital-capacity': 'dashboard:hospital-capacity',
}

VISIT_LABELS = {
    'outpatient': 'Pemeriksaan Rawat Jalan',
    'inpatient': 'Pemeriksaan Rawat Inap',
    'emergency': 'Pemeriksaan UGD',
}


def invalidate_dashboard() -> None:
    cache.delete_many(list(CACHE_KEYS.values()))


def cached(name: str, build: Callable[[], object]):
    ttl = getattr(settings, 'SIMRS_DASHBOARD_CACHE_TTL', 60)
    if not ttl:
        return build()
    key = CACHE_KEYS[name]
    hit = cache.get(key)
    if hit is not None:
        return hit
    value = build()
    cache.set(key, value, ttl)
    return value


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value or date.min, time.min, tzinfo=timezone.get_current_timezone())


def dashboard_stats(storage: Storage) -> dict:
    today = timezone.localdate()
    outpatient_today = [
        r for r in storage.list('medical_record', visitType='outpatient')
        if r['visitDate'] == today
    ]
    monthly_revenue = sum(
        (b['paidAmount'] or Decimal('0') for b in storage.list('billing')
         if b['billDate'].year == today.year and b['billDate'].month == today.month),
        Decimal('0'),
    )
    return {
        'totalPatients': storage.count('patient'),
        'outpatientToday': len(outpatient_today),
        'inpatientActive': storage.count('admission', status='active'),
        'monthlyRevenue': monthly_revenue,
    }


def recent_activities(storage: Storage, limit: int = 5) -> list[dict]:
    """Latest medical records, lab results and prescriptions, newest first."""
    newest = lambda rows, n: sorted(rows, key=lambda r: _as_datetime(r['createdAt']), reverse=True)[:n]  # noqa: E731
    patients: dict[int, dict | None] = {}

    def patient(pid):
        if pid not in patients:
            patients[pid] = storage.get('patient', pid)
        return patients[pid]

    activities = []
    for record in newest(storage.list('medical_record'), 5):
        p = patient(record['patientId'])
        if p:
            activities.append({
                'patientId': p['id'],
                'patientName': p['name'],
                'activity': VISIT_LABELS.get(record['visitType'], VISIT_LABELS['emergency']),
                'timestamp': record['createdAt'],
            })
    for result in newest(storage.list('lab_result'), 3):
        request = storage.get('lab_request', result['labRequestId'])
        p = patient(request['patientId']) if request else None
        if p:
            test = storage.get('lab_test', result['labTestId'])
            activities.append({
                'patientId': p['id'],
                'patientName': p['name'],
                'activity': f"Pemeriksaan Lab {test['name'] if test else ''}".rstrip(),
                'timestamp': result['createdAt'],
            })
    for prescription in newest(storage.list('prescription'), 3):
        p = patient(prescription['patientId'])
        if p:
            activities.append({
                'patientId': p['id'],
                'patientName': p['name'],
                'activity': 'Pengambilan Obat',
                'timestamp': prescription['createdAt'],
            })
    activities.sort(key=lambda a: _as_datetime(a['timestamp']), reverse=True)
    return activities[:limit]


def upcoming_appointments_list(storage: Storage, limit: int = 4) -> list[dict]:
    from hospital.services.scheduling import upcoming_appointments

    result = []
    for appointment in upcoming_appointments(storage)[:limit]:
        patient = storage.get('patient', appointment['patientId'])
        doctor = storage.get('doctor', appointment['doctorId'])
        department = storage.get('department', appointment['departmentId'])
        if patient and doctor and department:
            result.append({
                'id': appointment['id'],
                'patientId': patient['id'],
                'patientName': patient['name'],
                'doctorName': doctor['name'],
                'departmentName': department['name'],
                'appointmentDate': appointment['appointmentDate'],
                'appointmentTime': appointment['appointmentTime'],
                'status': appointment['status'],
            })
    return result


def hospital_capacity(storage: Storage) -> dict:
    """Bed occupancy by ward type plus today's outpatient/emergency load.

    Ward beds are every non-ICU bed.  Outpatient and emergency have no
    bed model, so their occupancy is today's visit count capped at the
    configured daily capacity.
    """
    room_types = {r['id']: r['roomType'] for r in storage.list('room')}
    ward = {'total': 0, 'occupied': 0}
    icu = {'total': 0, 'occupied': 0}
    for bed in storage.list('bed'):
        bucket = icu if room_types.get(bed['roomId']) == 'icu' else ward
        bucket['total'] += 1
        if bed['status'] == 'occupied':
            bucket['occupied'] += 1

    today = timezone.localdate()
    visits_today = [r for r in storage.list('medical_record') if r['visitDate'] == today]
    outpatient_total = settings.SIMRS_OUTPATIENT_CAPACITY
    emergency_total = settings.SIMRS_EMERGENCY_CAPACITY
    outpatient = sum(1 for r in visits_today if r['visitType'] == 'outpatient')
    emergency = sum(1 for r in visits_today if r['visitType'] == 'emergency')
    return {
        'bedCapacity': ward,
        'icuCapacity': icu,
        'outpatientCapacity': {'total': outpatient_total, 'occupied': min(outpatient, outpatient_total)},
        'emergencyCapacity': {'total': emergency_total, 'occupied': min(emergency, emergency_total)},
    }
