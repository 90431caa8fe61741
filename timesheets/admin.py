from django.contrib import admin
from django.db.models import Sum
from .models import TimesheetEntry, TimesheetComment, TimesheetLock


@admin.register(TimesheetEntry)
class TimesheetEntryAdmin(admin.ModelAdmin):
    list_display = [
        'employee_name', 'project_name', 'entry_date', 'hours', 'comment_preview', 'updated_at'
    ]
    list_filter = [
        'entry_date', 'assignment__project__customer', 'assignment__project',
        'assignment__employee__department'
    ]
    search_fields = [
        'assignment__employee__first_name', 'assignment__employee__last_name',
        'assignment__project__name', 'comment'
    ]
    ordering = ['-entry_date']
    date_hierarchy = 'entry_date'

    list_select_related = ['assignment__employee', 'assignment__project']
    readonly_fields = ['updated_at']

    def employee_name(self, obj):
        return obj.assignment.employee.full_name
    employee_name.short_description = 'Employee'

    def project_name(self, obj):
        return obj.assignment.project.name
    project_name.short_description = 'Project'

    def comment_preview(self, obj):
        """Show truncated comment"""
        if obj.comment:
            return obj.comment[:50] + '...' if len(obj.comment) > 50 else obj.comment
        return '-'
    comment_preview.short_description = 'Comment'

    actions = ['calculate_total_hours']

    def calculate_total_hours(self, request, queryset):
        """Calculate total hours for selected entries"""
        total = queryset.aggregate(total_hours=Sum('hours'))['total_hours'] or 0
        self.message_user(request, f"Total hours for selected entries: {total}")
    calculate_total_hours.short_description = "Calculate total hours for selected entries"


@admin.register(TimesheetComment)
class TimesheetCommentAdmin(admin.ModelAdmin):
    list_display = ['employee', 'comment_date', 'updated_at']
    search_fields = ['employee__first_name', 'employee__last_name', 'comment']
    date_hierarchy = 'comment_date'


@admin.register(TimesheetLock)
class TimesheetLockAdmin(admin.ModelAdmin):
    list_display = ['name', 'date_start', 'date_end']
    date_hierarchy = 'date_start'
