from django.urls import path
from . import views

urlpatterns = [
    # Weekly timesheet form: GET renders, POST persists
    path('week/', views.timesheet_week, name='timesheet-week'),

    # Period locks (admin)
    path('locks/', views.lock_list_create, name='lock-list-create'),
    path('locks/<int:pk>/', views.lock_detail, name='lock-detail'),
]
