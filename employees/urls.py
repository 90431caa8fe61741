from django.urls import path
from . import views

urlpatterns = [
    path('', views.employee_list_create, name='employee-list-create'),
    path('<int:pk>/', views.employee_detail, name='employee-detail'),
    path('me/', views.current_employee, name='current-employee'),
    path('choices/', views.employee_choices, name='employee-choices'),
]
