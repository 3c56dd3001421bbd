"""
Unit tests for RadiologyOrderForm / StudyForm validation.
"""
import pytest

from radiology.forms import RadiologyOrderForm, StudyForm
from radiology.models import PerformedProcedureStepStatus, ScheduledProcedureStepStatus
from tests.conftest import PatientFactory, StudyFactory


def order_data(patient, **overrides):
    data = {
        'order-patient': str(patient.pk),
        'order-urgency': 'routine',
        'order-instructions': '',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestRadiologyOrderForm:

    def test_routine_order_is_valid(self):
        form = RadiologyOrderForm(order_data(PatientFactory()))
        assert form.is_valid(), form.errors

    def test_patient_is_required(self):
        form = RadiologyOrderForm({'order-urgency': 'routine'})

        assert not form.is_valid()
        assert 'patient' in form.errors

    def test_scheduled_date_required_for_on_scheduled_date(self):
        form = RadiologyOrderForm(order_data(PatientFactory(), **{'order-urgency': 'on_scheduled_date'}))

        assert not form.is_valid()
        assert 'scheduled_date' in form.errors

    def test_on_scheduled_date_with_date_is_valid(self):
        form = RadiologyOrderForm(order_data(
            PatientFactory(),
            **{'order-urgency': 'on_scheduled_date', 'order-scheduled_date': '2026-11-02T09:30'},
        ))
        assert form.is_valid(), form.errors

    def test_scheduled_date_rejected_for_stat(self):
        form = RadiologyOrderForm(order_data(
            PatientFactory(),
            **{'order-urgency': 'stat', 'order-scheduled_date': '2026-11-02T09:30'},
        ))

        assert not form.is_valid()
        assert 'scheduled_date' in form.errors


@pytest.mark.django_db
class TestStudyForm:

    def test_valid_with_modality_only(self):
        form = StudyForm({'study-modality': 'CT'})

        assert form.is_valid(), form.errors

    def test_procedure_statuses_are_not_editable(self):
        study = StudyFactory(
            performed_status=PerformedProcedureStepStatus.IN_PROGRESS,
            scheduled_status=ScheduledProcedureStepStatus.STARTED,
        )
        form = StudyForm(
            {
                'study-modality': 'MR',
                'study-performed_status': '',
                'study-scheduled_status': '',
            },
            instance=study,
        )

        assert form.is_valid(), form.errors
        assert 'performed_status' not in form.fields
        assert 'scheduled_status' not in form.fields

        saved = form.save()
        saved.refresh_from_db()
        assert saved.modality == 'MR'
        assert saved.performed_status == PerformedProcedureStepStatus.IN_PROGRESS
        assert saved.scheduled_status == ScheduledProcedureStepStatus.STARTED

    def test_unknown_modality_is_invalid(self):
        form = StudyForm({'study-modality': 'XX'})

        assert not form.is_valid()
        assert 'modality' in form.errors
