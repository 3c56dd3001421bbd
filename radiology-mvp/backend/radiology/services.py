import logging

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from .authorization import radiology_access
from .exceptions import BlockError
from .models import Patient, RadiologyOrder, Study
from .worklist import types as worklist_actions
from .worklist.factory import get_worklist_client

logger = logging.getLogger(__name__)

ORDER_LIST_LIMIT = 20


# ── Lookups ────────────────────────────────────────────────────────────────

def get_patient(patient_id):
    """Get patient by ID. Raises BlockError(404) if not found."""
    try:
        return Patient.objects.get(id=patient_id)
    except Patient.DoesNotExist:
        raise BlockError(
            message='Patient not found',
            code='PATIENT_NOT_FOUND',
            detail={'patient_id': str(patient_id)},
            http_status=404,
        )


def get_order(order_id):
    """Get radiology order by ID. Raises BlockError(404) if not found."""
    try:
        return RadiologyOrder.objects.select_related('patient', 'orderer').get(id=order_id)
    except RadiologyOrder.DoesNotExist:
        raise BlockError(
            message='Radiology order not found',
            code='ORDER_NOT_FOUND',
            detail={'order_id': str(order_id)},
            http_status=404,
        )


def get_study_by_order(order):
    """Get the study attached to an order. Raises BlockError(404) if it has none."""
    try:
        return Study.objects.get(order=order)
    except Study.DoesNotExist:
        raise BlockError(
            message='Study not found for radiology order',
            code='STUDY_NOT_FOUND',
            detail={'order_id': str(order.pk)},
            http_status=404,
        )


def search_orders(query=''):
    """
    Order list。query 为空时返回最新的订单。
    匹配：订单号（纯数字时）/ 患者 MRN / 患者姓名 / modality。
    """
    orders = RadiologyOrder.objects.select_related('patient', 'study')

    query = (query or '').strip()
    if query:
        condition = (
            Q(patient__mrn__icontains=query) |
            Q(patient__first_name__icontains=query) |
            Q(patient__last_name__icontains=query) |
            Q(study__modality__iexact=query)
        )
        if query.isdigit():
            condition |= Q(id=int(query))
        orders = orders.filter(condition)

    return orders.order_by('-created_at', '-id')[:ORDER_LIST_LIMIT]


def get_patient_orders(patient):
    return (
        RadiologyOrder.objects.filter(patient=patient)
        .select_related('study')
        .order_by('-created_at', '-id')
    )


# ── New order ──────────────────────────────────────────────────────────────

def new_order(user, patient=None):
    """
    Build an unsaved order + study pair for the order form.

    - 当前用户是 referring physician（有下单权限）→ orderer 预填为该用户
    - 给了 patient → 预填 patient
    """
    order = RadiologyOrder()
    if radiology_access.can_place_order(user):
        order.orderer = user
    if patient is not None:
        order.patient = patient
    study = Study(order=order)
    return order, study


# ── Save ───────────────────────────────────────────────────────────────────

def save_order(order):
    is_new = order.pk is None
    order.save()
    logger.info("[save_order] order_id=%s %s", order.pk, 'created' if is_new else 'updated')
    return order


def save_study(study):
    """
    持久化 study，并同步到 modality worklist。

    新 study → worklist save；已有 study → worklist update。
    worklist 的结果写入 study.mwl_status，调用方据此决定给用户什么提示。
    """
    action = worklist_actions.SAVE if study.pk is None else worklist_actions.UPDATE
    study.save()
    return _push_to_worklist(action, study)


def save_order_with_study(order, study):
    """订单和 study 在同一个事务里保存，study 保存失败时订单一起回滚。"""
    with transaction.atomic():
        order = save_order(order)
        study.order = order
        return order, save_study(study)


def _push_to_worklist(action, study):
    status = get_worklist_client().dispatch(action, study)
    study.mwl_status = status
    study.save(update_fields=['mwl_status', 'updated_at'])

    if status == action.err:
        logger.warning("[Worklist] %s returned %s for study_id=%s", action.name, status, study.pk)
    else:
        logger.info("[Worklist] %s returned %s for study_id=%s", action.name, status, study.pk)
    return study


# ── Lifecycle transitions ──────────────────────────────────────────────────
#
# 先查 study 再改订单：没有 study 的订单直接 404，订单状态不动。

def _illegal_transition(order, action):
    return BlockError(
        message=f"Cannot {action} radiology order #{order.pk} in state '{order.lifecycle_state}'.",
        code='ILLEGAL_TRANSITION',
        detail={'order_id': str(order.pk), 'action': action, 'state': order.lifecycle_state},
    )


def void_order(order, reason=''):
    """Void order and its worklist entry. Returns the study with its new mwl_status."""
    if order.voided:
        raise _illegal_transition(order, 'void')
    study = get_study_by_order(order)

    with transaction.atomic():
        order.voided = True
        order.void_reason = reason or ''
        order.date_voided = timezone.now()
        order.save(update_fields=['voided', 'void_reason', 'date_voided', 'updated_at'])
        logger.info("[void_order] order_id=%s voided", order.pk)
        return _push_to_worklist(worklist_actions.VOID, study)


def unvoid_order(order):
    if not order.voided:
        raise _illegal_transition(order, 'unvoid')
    study = get_study_by_order(order)

    with transaction.atomic():
        order.voided = False
        order.void_reason = ''
        order.date_voided = None
        order.save(update_fields=['voided', 'void_reason', 'date_voided', 'updated_at'])
        logger.info("[unvoid_order] order_id=%s unvoided", order.pk)
        return _push_to_worklist(worklist_actions.UNVOID, study)


def discontinue_order(order, reason=''):
    if order.voided or order.discontinued:
        raise _illegal_transition(order, 'discontinue')
    study = get_study_by_order(order)

    with transaction.atomic():
        order.discontinued = True
        order.discontinued_reason = reason or ''
        order.date_discontinued = timezone.now()
        order.save(update_fields=['discontinued', 'discontinued_reason', 'date_discontinued', 'updated_at'])
        logger.info("[discontinue_order] order_id=%s discontinued", order.pk)
        return _push_to_worklist(worklist_actions.DISCONTINUE, study)


def undiscontinue_order(order):
    if order.voided or not order.discontinued:
        raise _illegal_transition(order, 'undiscontinue')
    study = get_study_by_order(order)

    with transaction.atomic():
        order.discontinued = False
        order.discontinued_reason = ''
        order.date_discontinued = None
        order.save(update_fields=['discontinued', 'discontinued_reason', 'date_discontinued', 'updated_at'])
        logger.info("[undiscontinue_order] order_id=%s undiscontinued", order.pk)
        return _push_to_worklist(worklist_actions.UNDISCONTINUE, study)
