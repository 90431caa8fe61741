from django.urls import path
from . import views

urlpatterns = [
    path('', views.project_list_create, name='project-list-create'),
    path('<int:pk>/', views.project_detail, name='project-detail'),
    path('managed/', views.managed_projects, name='managed-projects'),
    path('with-pm/', views.projects_with_pm, name='projects-with-pm'),
    path('choices/', views.project_choices, name='project-choices'),
    path('customers/', views.customer_list_create, name='customer-list-create'),
    path('assignments/', views.assignment_list_create, name='assignment-list-create'),
]
