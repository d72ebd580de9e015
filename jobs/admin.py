from django.contrib import admin
from .models import Job, Application


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'owner_email', 'deadline', 'applicant_count', 'status')
    list_filter = ('category', 'status')
    search_fields = ('title', 'owner_email')


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('applicant_email', 'job', 'category', 'applied_at')
    list_filter = ('category',)
    search_fields = ('applicant_email',)
