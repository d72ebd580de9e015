# jobboard/urls.py
from django.contrib import admin
from django.http import HttpResponse
from django.urls import path, include


def index(request):
    return HttpResponse("Job board server is running..!", content_type='text/plain')


urlpatterns = [
    path('admin/', admin.site.urls),

    # Liveness
    path('', index, name='index'),

    # Auth cookie (issue / clear)
    path('', include('accounts.urls')),

    # Job listings, query layer and applications
    path('', include('jobs.urls')),

    # Blog content (read-only)
    path('blogs/', include('blogs.urls')),
]
