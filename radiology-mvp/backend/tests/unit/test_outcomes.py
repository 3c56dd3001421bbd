"""
Unit tests for the order form outcome routing.

不需要数据库：order / study 都是未保存的 model 实例，只用到 id 和状态字段。
"""
import pytest
from django.contrib import messages

from radiology import outcomes
from radiology.models import MwlStatus, PerformedProcedureStepStatus, RadiologyOrder, Study
from radiology.outcomes import (
    FAIL_WORKLIST,
    MWL_STATUS_IS_ERROR,
    ORDER_DISCONTINUED,
    ORDER_SAVED,
    ORDER_UNDISCONTINUED,
    ORDER_UNVOIDED,
    ORDER_VOIDED,
    SAVED_FAIL_WORKLIST,
    STUDY_PERFORMED,
    invalid_form_outcome,
    resolve_action_outcome,
    resolve_save_outcome,
)

ORDER_PATIENT_ID = 7


def make_order():
    return RadiologyOrder(id=1, patient_id=ORDER_PATIENT_ID)


def make_study(mwl_status=MwlStatus.SAVE_OK, performed_status=None):
    return Study(id=1, order_id=1, mwl_status=mwl_status, performed_status=performed_status)


class TestStatusTable:

    def test_every_mwl_status_is_classified(self):
        assert set(MWL_STATUS_IS_ERROR) == set(MwlStatus)

    def test_only_err_members_are_errors(self):
        errors = {status for status, is_error in MWL_STATUS_IS_ERROR.items() if is_error}
        assert errors == {status for status in MwlStatus if status.value.endswith('_err')}

    def test_save_failures_are_errors(self):
        for status in outcomes.SAVE_FAILURE_STATUSES:
            assert outcomes.is_worklist_error(status)

    def test_unknown_status_is_not_an_error(self):
        assert outcomes.is_worklist_error('something_new') is False

    def test_every_action_has_a_message(self):
        for _, code in outcomes.ACTION_OUTCOMES.values():
            assert code in outcomes.MESSAGES


class TestInvalidForm:

    def test_renders_form_without_message(self):
        outcome = invalid_form_outcome()
        assert outcome.renders_form
        assert outcome.message is None
        assert outcome.level is None


class TestResolveSaveOutcome:

    @pytest.mark.parametrize('status', [MwlStatus.SAVE_ERR, MwlStatus.UPDATE_ERR])
    def test_worklist_failure_redirects_to_order_patient(self, status):
        outcome = resolve_save_outcome(make_order(), make_study(status), can_schedule=False)

        assert outcome.redirect_to == f'/radiology/patients/{ORDER_PATIENT_ID}/'
        assert outcome.code == SAVED_FAIL_WORKLIST
        assert outcome.level == messages.WARNING

    def test_worklist_failure_prefers_given_patient_id(self):
        outcome = resolve_save_outcome(
            make_order(), make_study(MwlStatus.SAVE_ERR), can_schedule=False, patient_id=42,
        )
        assert outcome.redirect_to == '/radiology/patients/42/'
        assert outcome.code == SAVED_FAIL_WORKLIST

    def test_worklist_failure_wins_over_in_progress_guard(self):
        study = make_study(MwlStatus.UPDATE_ERR, PerformedProcedureStepStatus.IN_PROGRESS)
        outcome = resolve_save_outcome(make_order(), study, can_schedule=True)

        assert outcome.code == SAVED_FAIL_WORKLIST
        assert not outcome.renders_form

    def test_in_progress_study_edited_by_scheduler_renders_form_with_error(self):
        study = make_study(MwlStatus.SAVE_OK, PerformedProcedureStepStatus.IN_PROGRESS)
        outcome = resolve_save_outcome(make_order(), study, can_schedule=True, patient_id=42)

        assert outcome.renders_form
        assert outcome.code == STUDY_PERFORMED
        assert outcome.level == messages.ERROR
        assert outcome.message == 'The study is already being performed.'

    def test_in_progress_study_without_scheduler_is_saved(self):
        study = make_study(MwlStatus.SAVE_OK, PerformedProcedureStepStatus.IN_PROGRESS)
        outcome = resolve_save_outcome(make_order(), study, can_schedule=False)

        assert outcome.code == ORDER_SAVED
        assert outcome.redirect_to == '/radiology/orders/'

    def test_completed_study_edited_by_scheduler_is_saved(self):
        study = make_study(MwlStatus.UPDATE_OK, PerformedProcedureStepStatus.COMPLETED)
        outcome = resolve_save_outcome(make_order(), study, can_schedule=True)

        assert outcome.code == ORDER_SAVED

    def test_success_without_patient_id_redirects_to_order_list(self):
        outcome = resolve_save_outcome(make_order(), make_study(), can_schedule=False)

        assert outcome.redirect_to == '/radiology/orders/'
        assert outcome.code == ORDER_SAVED
        assert outcome.level == messages.SUCCESS
        assert outcome.message == 'Order saved.'

    def test_success_with_patient_id_redirects_to_dashboard(self):
        outcome = resolve_save_outcome(make_order(), make_study(), can_schedule=False, patient_id=42)

        assert outcome.redirect_to == '/radiology/patients/42/'
        assert outcome.code == ORDER_SAVED

    @pytest.mark.parametrize('status', [
        MwlStatus.DEFAULT, MwlStatus.VOID_ERR, MwlStatus.DISCONTINUE_OK, 'something_new',
    ])
    def test_other_statuses_take_success_path(self, status):
        outcome = resolve_save_outcome(make_order(), make_study(status), can_schedule=False)
        assert outcome.code == ORDER_SAVED


class TestResolveActionOutcome:

    @pytest.mark.parametrize('action, status, code', [
        ('void_order', MwlStatus.VOID_OK, ORDER_VOIDED),
        ('unvoid_order', MwlStatus.UNVOID_OK, ORDER_UNVOIDED),
        ('discontinue_order', MwlStatus.DISCONTINUE_OK, ORDER_DISCONTINUED),
        ('undiscontinue_order', MwlStatus.UNDISCONTINUE_OK, ORDER_UNDISCONTINUED),
    ])
    def test_success_status_maps_to_fixed_message(self, action, status, code):
        outcome = resolve_action_outcome(action, make_order(), make_study(status))

        assert outcome.redirect_to == f'/radiology/patients/{ORDER_PATIENT_ID}/'
        assert outcome.code == code
        assert outcome.level == messages.SUCCESS

    @pytest.mark.parametrize('action, status', [
        ('void_order', MwlStatus.VOID_ERR),
        ('unvoid_order', MwlStatus.VOID_OK),
        ('discontinue_order', MwlStatus.DISCONTINUE_ERR),
        ('undiscontinue_order', MwlStatus.DEFAULT),
    ])
    def test_other_status_warns_and_still_redirects(self, action, status):
        outcome = resolve_action_outcome(action, make_order(), make_study(status))

        assert outcome.redirect_to == f'/radiology/patients/{ORDER_PATIENT_ID}/'
        assert outcome.code == FAIL_WORKLIST
        assert outcome.level == messages.WARNING
