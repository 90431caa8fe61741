from django.urls import path
from . import views

urlpatterns = [
    path('export/', views.backup_export, name='backup-export'),
    path('restore/', views.backup_restore, name='backup-restore'),
]
