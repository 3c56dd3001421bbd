"""
Response serializers — ORM 对象 → JSON-able dict。

只负责「输出格式化」，不做任何解析或校验。
表单输入的解析和校验在 radiology/forms.py。
"""

from .outcomes import is_worklist_error


def _iso(value):
    return value.isoformat() if value else None


def serialize_patient(patient):
    return {
        'patient_id': patient.id,
        'name': f"{patient.first_name} {patient.last_name}",
        'mrn': patient.mrn,
    }


def serialize_study(study):
    return {
        'study_id': study.id,
        'study_instance_uid': study.study_instance_uid,
        'modality': study.modality,
        'scheduled_status': study.scheduled_status,
        'performed_status': study.performed_status,
        'mwl_status': study.mwl_status,
        'worklist_error': is_worklist_error(study.mwl_status),
    }


def serialize_order_detail(order, study):
    """Serialize order + study for the detail endpoint."""
    response = {
        'order_id': order.id,
        'state': order.lifecycle_state,
        'patient': serialize_patient(order.patient),
        'orderer': order.orderer.get_username() if order.orderer else None,
        'urgency': order.urgency,
        'scheduled_date': _iso(order.scheduled_date),
        'instructions': order.instructions,
        'study': serialize_study(study),
        'created_at': _iso(order.created_at),
        'updated_at': _iso(order.updated_at),
    }

    if order.voided:
        response['void'] = {
            'reason': order.void_reason,
            'date_voided': _iso(order.date_voided),
        }
    elif order.discontinued:
        response['discontinue'] = {
            'reason': order.discontinued_reason,
            'date_discontinued': _iso(order.date_discontinued),
        }

    return response


def serialize_search_results(orders):
    """Serialize search results list."""
    results = [
        {
            'order_id': order.id,
            'state': order.lifecycle_state,
            'patient_name': f"{order.patient.first_name} {order.patient.last_name}",
            'patient_mrn': order.patient.mrn,
            'modality': getattr(getattr(order, 'study', None), 'modality', None),
            'created_at': _iso(order.created_at),
        }
        for order in orders
    ]
    return {
        'count': len(results),
        'orders': results,
    }


def serialize_patient_orders(patient, orders):
    return {
        'patient': serialize_patient(patient),
        **serialize_search_results(orders),
    }
