from django.contrib import admin
from .models import Customer, Project, ProjectAssignment


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'is_active']
    list_filter = ['is_active']
    search_fields = ['code', 'name']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['project_code', 'name', 'customer', 'project_manager', 'is_active', 'is_default', 'billable']
    list_filter = ['is_active', 'is_default', 'billable', 'customer']
    search_fields = ['project_code', 'name', 'customer__name']
    list_select_related = ['customer', 'project_manager']


@admin.register(ProjectAssignment)
class ProjectAssignmentAdmin(admin.ModelAdmin):
    list_display = ['employee', 'project', 'assignment_type', 'date_start', 'date_end', 'is_active']
    list_filter = ['assignment_type', 'is_active', 'project__customer']
    search_fields = ['employee__first_name', 'employee__last_name', 'project__name']
    list_select_related = ['employee', 'project']
