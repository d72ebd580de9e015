# jobs/forms.py
from django import forms
from .models import Job, Application

# keys the server owns; never taken from a request body
READ_ONLY_KEYS = ('id', '_id', 'created_at', 'updated_at', 'applied_at')


class JobForm(forms.ModelForm):
    """
    Validates a JSON job document. Known fields map to columns, every other
    key is kept in `details`. Binding with an instance merges the payload
    over the stored values, so a PATCH only changes what it sends.
    """
    applicant_count = forms.IntegerField(min_value=0, required=False)

    class Meta:
        model = Job
        fields = ['title', 'category', 'deadline', 'applicant_count', 'owner_email', 'status']

    def __init__(self, payload, instance=None):
        payload = {k: v for k, v in payload.items() if k not in READ_ONLY_KEYS}
        known = set(self.Meta.fields)
        data = _current_values(instance) if instance is not None else {}
        data.update({k: v for k, v in payload.items() if k in known})
        self.extra_fields = {k: v for k, v in payload.items() if k not in known and k != 'details'}
        super().__init__(data, instance=instance)

    def clean_applicant_count(self):
        # null keeps the stored count (0 for a new job)
        count = self.cleaned_data.get('applicant_count')
        return self.instance.applicant_count if count is None else count

    def save(self, commit=True):
        job = super().save(commit=False)
        details = dict(job.details or {})
        details.update(self.extra_fields)
        job.details = details
        if commit:
            job.save()
        return job


def _current_values(job):
    return {
        'title': job.title,
        'category': job.category,
        'deadline': job.deadline.isoformat() if job.deadline else '',
        'applicant_count': job.applicant_count,
        'owner_email': job.owner_email,
        'status': job.status,
    }


class ApplicationForm(forms.Form):
    applicant_email = forms.EmailField()
    job_id = forms.IntegerField(min_value=1)
    category = forms.CharField(required=False, max_length=100)

    def __init__(self, payload):
        payload = {k: v for k, v in payload.items() if k not in READ_ONLY_KEYS}
        known = set(self.base_fields)
        self.extra_fields = {k: v for k, v in payload.items() if k not in known}
        super().__init__({k: v for k, v in payload.items() if k in known})

    def build(self, job):
        """Unsaved Application for `job`; category falls back to the job's."""
        return Application(
            applicant_email=self.cleaned_data['applicant_email'],
            job=job,
            category=self.cleaned_data.get('category') or job.category,
            details=self.extra_fields,
        )
