"""
Order form outcome routing.

Given what the service layer returned, decide where the user goes next and
which single message they see. Nothing here touches the request or the
session: views apply the returned Outcome with django.contrib.messages.

Save precedence:
  1. form invalid                          → form again, no message
  2. worklist SAVE_ERR / UPDATE_ERR        → patient dashboard, warning
  3. study in progress + scheduler user    → form again, error
  4. otherwise                             → dashboard (patient_id given) or order list, success
"""

from dataclasses import dataclass
from typing import Optional

from django.contrib import messages
from django.urls import reverse

from .models import MwlStatus

# ── Message keys ───────────────────────────────────────────────────────────

ORDER_SAVED = 'ORDER_SAVED'
SAVED_FAIL_WORKLIST = 'SAVED_FAIL_WORKLIST'
STUDY_PERFORMED = 'STUDY_PERFORMED'
FAIL_WORKLIST = 'FAIL_WORKLIST'
ORDER_VOIDED = 'ORDER_VOIDED'
ORDER_UNVOIDED = 'ORDER_UNVOIDED'
ORDER_DISCONTINUED = 'ORDER_DISCONTINUED'
ORDER_UNDISCONTINUED = 'ORDER_UNDISCONTINUED'

MESSAGES = {
    ORDER_SAVED: 'Order saved.',
    SAVED_FAIL_WORKLIST: 'Order saved, but the study could not be sent to the modality worklist.',
    STUDY_PERFORMED: 'The study is already being performed.',
    FAIL_WORKLIST: 'The modality worklist could not be updated.',
    ORDER_VOIDED: 'Order voided successfully.',
    ORDER_UNVOIDED: 'Order unvoided successfully.',
    ORDER_DISCONTINUED: 'Order discontinued successfully.',
    ORDER_UNDISCONTINUED: 'Order undiscontinued successfully.',
}

# 每个 MwlStatus 都必须在这里出现（tests 会检查），新增状态忘了归类会直接挂测试。
# True = worklist 报错
MWL_STATUS_IS_ERROR = {
    MwlStatus.DEFAULT: False,
    MwlStatus.SAVE_OK: False,
    MwlStatus.SAVE_ERR: True,
    MwlStatus.UPDATE_OK: False,
    MwlStatus.UPDATE_ERR: True,
    MwlStatus.VOID_OK: False,
    MwlStatus.VOID_ERR: True,
    MwlStatus.UNVOID_OK: False,
    MwlStatus.UNVOID_ERR: True,
    MwlStatus.DISCONTINUE_OK: False,
    MwlStatus.DISCONTINUE_ERR: True,
    MwlStatus.UNDISCONTINUE_OK: False,
    MwlStatus.UNDISCONTINUE_ERR: True,
}

# 保存订单时只有这两个算 "worklist 失败"；其余（包括未归类的值）走成功路径
SAVE_FAILURE_STATUSES = frozenset({MwlStatus.SAVE_ERR, MwlStatus.UPDATE_ERR})

# action flag → (期望的成功状态, 成功提示)
ACTION_OUTCOMES = {
    'void_order': (MwlStatus.VOID_OK, ORDER_VOIDED),
    'unvoid_order': (MwlStatus.UNVOID_OK, ORDER_UNVOIDED),
    'discontinue_order': (MwlStatus.DISCONTINUE_OK, ORDER_DISCONTINUED),
    'undiscontinue_order': (MwlStatus.UNDISCONTINUE_OK, ORDER_UNDISCONTINUED),
}


@dataclass
class Outcome:
    redirect_to: Optional[str]       # None → render the order form again
    level: Optional[int] = None      # django.contrib.messages level
    code: Optional[str] = None
    message: Optional[str] = None

    @property
    def renders_form(self):
        return self.redirect_to is None


def _outcome(redirect_to, level, code):
    return Outcome(redirect_to=redirect_to, level=level, code=code, message=MESSAGES[code])


def patient_dashboard_url(patient_id):
    return reverse('radiology:patient-dashboard', kwargs={'patient_id': patient_id})


def order_list_url():
    return reverse('radiology:order-list')


def is_worklist_error(status):
    return MWL_STATUS_IS_ERROR.get(status, False)


def invalid_form_outcome():
    """Either form has errors: show it again with the entered data, no message."""
    return Outcome(redirect_to=None)


def resolve_save_outcome(order, study, *, can_schedule, patient_id=None):
    """
    Route a persisted order + study.

    Args:
        order:        saved RadiologyOrder
        study:        saved Study, mwl_status set by the worklist client
        can_schedule: acting user holds the scheduling capability
        patient_id:   explicit target patient (request parameter), optional
    """
    if study.mwl_status in SAVE_FAILURE_STATUSES:
        target = patient_id if patient_id is not None else order.patient_id
        return _outcome(patient_dashboard_url(target), messages.WARNING, SAVED_FAIL_WORKLIST)

    if study.is_in_progress and can_schedule:
        return _outcome(None, messages.ERROR, STUDY_PERFORMED)

    if patient_id is not None:
        return _outcome(patient_dashboard_url(patient_id), messages.SUCCESS, ORDER_SAVED)
    return _outcome(order_list_url(), messages.SUCCESS, ORDER_SAVED)


def resolve_action_outcome(action, order, study):
    """
    void / unvoid / discontinue / undiscontinue.

    成功状态一一对应固定提示；worklist 没回对应的 *_OK 时给 FAIL_WORKLIST 警告。
    都跳回该订单患者的 dashboard。
    """
    expected_status, code = ACTION_OUTCOMES[action]
    redirect_to = patient_dashboard_url(order.patient_id)

    if study.mwl_status == expected_status:
        return _outcome(redirect_to, messages.SUCCESS, code)
    return _outcome(redirect_to, messages.WARNING, FAIL_WORKLIST)
