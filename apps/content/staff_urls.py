from django.urls import path

from . import views

app_name = 'back_office'

urlpatterns = [
    path('dashboard/', views.dashboard_stats, name='dashboard_stats'),
]
