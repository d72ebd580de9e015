# jobs/urls.py
from django.urls import path
from . import views

app_name = 'jobs'

urlpatterns = [
    # job listing / CRUD
    path('jobs/', views.job_collection, name='job_collection'),               # GET list, POST create
    path('jobs/featured/', views.featured_jobs, name='featured_jobs'),        # top by applicants
    path('jobs/posted/<str:email>/', views.jobs_by_owner, name='jobs_by_owner'),
    path('jobs/<int:job_id>/', views.job_detail, name='job_detail'),          # GET, PATCH, DELETE

    # paginated search + matching count
    path('all-jobs/', views.all_jobs, name='all_jobs'),
    path('jobs-count/', views.jobs_count, name='jobs_count'),

    # applications
    path('applications/', views.application_collection, name='application_collection'),
    path('my-applications/', views.my_applications, name='my_applications'),
]
