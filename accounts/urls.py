# accounts/urls.py
from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('jwt/', views.issue_jwt, name='issue_jwt'),
    path('logout/', views.logout, name='logout'),
]
