from django.conf import settings
from django.db import models


class MwlStatus(models.TextChoices):
    """Modality worklist 同步结果，由 worklist client 在 save/void/discontinue 时写入。"""

    DEFAULT = 'default', 'Default'
    SAVE_OK = 'save_ok', 'Save OK'
    SAVE_ERR = 'save_err', 'Save error'
    UPDATE_OK = 'update_ok', 'Update OK'
    UPDATE_ERR = 'update_err', 'Update error'
    VOID_OK = 'void_ok', 'Void OK'
    VOID_ERR = 'void_err', 'Void error'
    UNVOID_OK = 'unvoid_ok', 'Unvoid OK'
    UNVOID_ERR = 'unvoid_err', 'Unvoid error'
    DISCONTINUE_OK = 'discontinue_ok', 'Discontinue OK'
    DISCONTINUE_ERR = 'discontinue_err', 'Discontinue error'
    UNDISCONTINUE_OK = 'undiscontinue_ok', 'Undiscontinue OK'
    UNDISCONTINUE_ERR = 'undiscontinue_err', 'Undiscontinue error'


class PerformedProcedureStepStatus(models.TextChoices):
    # NULL = not started
    IN_PROGRESS = 'in_progress', 'In progress'
    DISCONTINUED = 'discontinued', 'Discontinued'
    COMPLETED = 'completed', 'Completed'


class ScheduledProcedureStepStatus(models.TextChoices):
    SCHEDULED = 'scheduled', 'Scheduled'
    ARRIVED = 'arrived', 'Arrived'
    READY = 'ready', 'Ready'
    STARTED = 'started', 'Started'


class Modality(models.TextChoices):
    CR = 'CR', 'Computed Radiography'
    CT = 'CT', 'Computed Tomography'
    MR = 'MR', 'Magnetic Resonance'
    US = 'US', 'Ultrasound'
    NM = 'NM', 'Nuclear Medicine'
    PET = 'PET', 'Positron Emission Tomography'
    XA = 'XA', 'X-Ray Angiography'
    MG = 'MG', 'Mammography'
    DX = 'DX', 'Digital Radiography'


class Urgency(models.TextChoices):
    ROUTINE = 'routine', 'Routine'
    STAT = 'stat', 'STAT'
    ON_SCHEDULED_DATE = 'on_scheduled_date', 'On scheduled date'


class Patient(models.Model):
    mrn = models.CharField(max_length=6, unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    dob = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'patients'

    def __str__(self):
        return f"{self.first_name} {self.last_name} ({self.mrn})"


class RadiologyOrder(models.Model):
    LIFECYCLE_NEW = 'new'
    LIFECYCLE_SAVED = 'saved'
    LIFECYCLE_VOIDED = 'voided'
    LIFECYCLE_DISCONTINUED = 'discontinued'

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='radiology_orders')
    orderer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='radiology_orders',
    )
    urgency = models.CharField(max_length=20, choices=Urgency.choices, default=Urgency.ROUTINE)
    scheduled_date = models.DateTimeField(blank=True, null=True)
    instructions = models.TextField(blank=True, default='')

    voided = models.BooleanField(default=False)
    void_reason = models.CharField(max_length=255, blank=True, default='')
    date_voided = models.DateTimeField(blank=True, null=True)
    discontinued = models.BooleanField(default=False)
    discontinued_reason = models.CharField(max_length=255, blank=True, default='')
    date_discontinued = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'radiology_orders'
        permissions = [
            ('place_radiology_order', 'Can place radiology orders as referring physician'),
            ('schedule_radiology_study', 'Can schedule radiology studies'),
        ]

    def __str__(self):
        return f"RadiologyOrder #{self.pk}"

    @property
    def lifecycle_state(self):
        if self.pk is None:
            return self.LIFECYCLE_NEW
        if self.voided:
            return self.LIFECYCLE_VOIDED
        if self.discontinued:
            return self.LIFECYCLE_DISCONTINUED
        return self.LIFECYCLE_SAVED


class Study(models.Model):
    order = models.OneToOneField(RadiologyOrder, on_delete=models.CASCADE, related_name='study')
    study_instance_uid = models.CharField(max_length=64, blank=True, default='')
    modality = models.CharField(max_length=4, choices=Modality.choices, default=Modality.CR)
    scheduled_status = models.CharField(
        max_length=20, choices=ScheduledProcedureStepStatus.choices, blank=True, null=True,
    )
    performed_status = models.CharField(
        max_length=20, choices=PerformedProcedureStepStatus.choices, blank=True, null=True,
    )
    mwl_status = models.CharField(max_length=20, choices=MwlStatus.choices, default=MwlStatus.DEFAULT)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'studies'
        verbose_name_plural = 'studies'

    def __str__(self):
        return f"Study #{self.pk} ({self.modality})"

    @property
    def is_in_progress(self):
        return self.performed_status == PerformedProcedureStepStatus.IN_PROGRESS
