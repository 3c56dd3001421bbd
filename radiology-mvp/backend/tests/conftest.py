"""
Shared fixtures for all tests.

factory-boy factories live here so both unit/ and integration/ can import them.
"""
import pytest
from datetime import date

import factory
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.contrib.messages import get_messages
from django.test import Client

from radiology.models import MwlStatus, Patient, RadiologyOrder, Study


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = get_user_model()
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f'user{n}')

    @factory.post_generation
    def permissions(self, create, extracted, **kwargs):
        """UserFactory(permissions=['schedule_radiology_study'])"""
        if not create or not extracted:
            return
        for codename in extracted:
            self.user_permissions.add(
                Permission.objects.get(content_type__app_label='radiology', codename=codename)
            )


class PatientFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Patient

    mrn = factory.Sequence(lambda n: f'{100000 + n}')
    first_name = 'John'
    last_name = 'Doe'
    dob = date(1990, 1, 15)


class RadiologyOrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = RadiologyOrder

    patient = factory.SubFactory(PatientFactory)
    instructions = 'Chest, two views.'


class StudyFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Study

    order = factory.SubFactory(RadiologyOrderFactory)
    modality = 'CT'
    mwl_status = MwlStatus.SAVE_OK


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def flash_messages(response):
    """Messages queued for the request: [(extra_tags, level, text), ...]."""
    return [
        (message.extra_tags, message.level, message.message)
        for message in get_messages(response.wsgi_request)
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client():
    """Django test client for integration tests."""
    return Client()


@pytest.fixture
def scheduler():
    return UserFactory(username='scheduler', permissions=['schedule_radiology_study'])


@pytest.fixture
def referring_physician():
    return UserFactory(username='referrer', permissions=['place_radiology_order'])


@pytest.fixture
def order_form_payload():
    """Minimal valid POST body for the order form (patient filled in per test)."""
    return {
        'save_order': 'save_order',
        'order-urgency': 'routine',
        'order-instructions': 'Chest, two views.',
        'study-modality': 'CT',
        'study-study_instance_uid': '',
    }
