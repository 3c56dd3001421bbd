from django import forms

from .models import RadiologyOrder, Study, Urgency


class RadiologyOrderForm(forms.ModelForm):
    prefix = 'order'

    class Meta:
        model = RadiologyOrder
        fields = ['patient', 'orderer', 'urgency', 'scheduled_date', 'instructions']
        widgets = {
            'scheduled_date': forms.DateTimeInput(attrs={'type': 'datetime-local'}),
            'instructions': forms.Textarea(attrs={'rows': 3}),
        }

    def clean(self):
        cleaned_data = super().clean()
        urgency = cleaned_data.get('urgency')
        scheduled_date = cleaned_data.get('scheduled_date')

        if urgency == Urgency.ON_SCHEDULED_DATE and not scheduled_date:
            self.add_error('scheduled_date', 'Scheduled date is required when urgency is "on scheduled date".')
        if urgency != Urgency.ON_SCHEDULED_DATE and scheduled_date:
            self.add_error('scheduled_date', 'Scheduled date is only allowed when urgency is "on scheduled date".')

        return cleaned_data


class StudyForm(forms.ModelForm):
    """
    Study 可编辑字段。scheduled_status / performed_status 只由检查科一侧更新，
    不在表单里，保存时保留库里的值。
    """
    prefix = 'study'

    class Meta:
        model = Study
        fields = ['modality', 'study_instance_uid']
