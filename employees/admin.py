from django.contrib import admin
from .models import Employee, Department


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ['code', 'name']
    search_fields = ['code', 'name']


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_id', 'last_name', 'first_name', 'department', 'role', 'is_active']
    list_filter = ['role', 'department', 'is_active']
    search_fields = ['employee_id', 'first_name', 'last_name', 'email']
    list_select_related = ['department', 'user']
    readonly_fields = ['employee_id', 'created_at', 'updated_at']
