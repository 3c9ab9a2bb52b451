"""Laboratory requests and results."""
from __future__ import annotations

import logging

from django.utils import timezone

from hospital.storage import Storage
from hospital.services.audit import log_action
from hospital.services.dashboard import invalidate_dashboard
from hospital.services.integrity import check_references

logger = logging.getLogger(__name__)

COMPLETED = 'completed'


def create_lab_request(storage: Storage, data: dict, items: list[dict], *, user=None) -> dict:
    check_references(storage, 'lab_request', data)
    for item in items:
        check_references(storage, 'lab_request_item', item)
    with storage.atomic():
        request = storage.create('lab_request', data)
        created = [storage.create('lab_request_item', {**item, 'labRequestId': request['id']}) for item in items]
    log_action(user=user, action='lab_request_create', object_type='lab_request', object_id=request['id'],
               detail={'tests': [i['labTestId'] for i in created]})
    return {**request, 'items': created}


def record_lab_result(storage: Storage, data: dict, *, user=None) -> dict:
    """Store a result; the request is completed once every item has one."""
    check_references(storage, 'lab_result', data)
    with storage.atomic():
        request = storage.get_or_404('lab_request', data['labRequestId'], for_update=True)
        result = storage.create('lab_result', data)
        items = storage.count('lab_request_item', labRequestId=request['id'])
        results = storage.count('lab_result', labRequestId=request['id'])
        if items <= results and request['status'] != COMPLETED:
            storage.update('lab_request', request['id'], {'status': COMPLETED})
            logger.info('lab request %s completed', request['id'])
    log_action(user=user, action='lab_result_create', object_type='lab_result', object_id=result['id'],
               detail={'labRequestId': request['id'], 'flag': result['flag']})
    invalidate_dashboard()
    return result


def update_lab_result(storage: Storage, result_id: int, data: dict, *, user=None) -> dict:
    changes = dict(data)
    if changes.get('verified'):
        changes.setdefault('verifiedDate', timezone.localdate())
        if user is not None and getattr(user, 'pk', None):
            changes.setdefault('verifiedById', user.pk)
    result = storage.update('lab_result', result_id, changes)
    if changes.get('verified'):
        log_action(user=user, action='lab_result_verify', object_type='lab_result', object_id=result_id,
                   detail={'verifiedById': result['verifiedById']})
    invalidate_dashboard()
    return result


def lab_request_detail(storage: Storage, request_id: int) -> dict:
    request = storage.get_or_404('lab_request', request_id)
    results = storage.list('lab_result', labRequestId=request['id'])
    items = []
    for item in storage.list('lab_request_item', labRequestId=request['id']):
        items.append({
            **item,
            'labTest': storage.get('lab_test', item['labTestId']),
            'results': [r for r in results if r['labTestId'] == item['labTestId']],
        })
    return {**request, 'items': items}


def patient_lab_requests(storage: Storage, patient_id: int) -> list[dict]:
    rows = storage.list('lab_request', patientId=patient_id)
    return sorted(rows, key=lambda r: r['requestDate'], reverse=True)
