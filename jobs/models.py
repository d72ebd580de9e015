# jobs/models.py
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Job(models.Model):
    title = models.CharField(max_length=255)
    category = models.CharField(max_length=100, db_index=True)
    deadline = models.DateTimeField(null=True, blank=True, db_index=True)
    applicant_count = models.PositiveIntegerField(default=0, validators=[MinValueValidator(0)])
    owner_email = models.EmailField(db_index=True)
    status = models.CharField(max_length=50, default='open', blank=True)
    # any other fields the poster submitted
    details = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.title} ({self.category})"

    def as_json(self):
        data = dict(self.details or {})
        data.update({
            'id': self.id,
            'title': self.title,
            'category': self.category,
            'deadline': self.deadline.isoformat() if self.deadline else None,
            'applicant_count': self.applicant_count,
            'owner_email': self.owner_email,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        })
        return data


class Application(models.Model):
    applicant_email = models.EmailField(db_index=True)
    # weak reference: deleting a job leaves its applications in place
    job = models.ForeignKey(
        Job,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='applications',
    )
    category = models.CharField(max_length=100, blank=True, db_index=True)
    details = models.JSONField(default=dict, blank=True)
    applied_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['applicant_email', 'job'], name='unique_application_per_job'),
        ]

    def __str__(self):
        return f"{self.applicant_email} -> job {self.job_id}"

    def as_json(self):
        data = dict(self.details or {})
        data.update({
            'id': self.id,
            'applicant_email': self.applicant_email,
            'job_id': self.job_id,
            'category': self.category,
            'applied_at': self.applied_at.isoformat() if self.applied_at else None,
        })
        return data
