from datetime import timedelta

from rest_framework import serializers
from ehour_backend.resources import get_message
from .dto import DAYS_IN_WEEK
from .models import TimesheetLock
from .utils import get_week_number


def _as_float(value):
    return float(value) if value is not None else None


class TimesheetDateSerializer(serializers.Serializer):
    date = serializers.DateField()
    day_in_week = serializers.IntegerField()
    formatted = serializers.CharField()
    locked = serializers.BooleanField()
    label = serializers.SerializerMethodField()

    def get_label(self, obj):
        return obj.date.strftime('%a %d')


class TimesheetCellSerializer(serializers.Serializer):
    date = serializers.DateField()
    hours = serializers.SerializerMethodField()
    comment = serializers.SerializerMethodField()
    valid = serializers.BooleanField()
    locked = serializers.BooleanField()
    editable = serializers.BooleanField(source='is_editable')

    def get_hours(self, obj):
        return _as_float(obj.hours)

    def get_comment(self, obj):
        return obj.entry.comment if obj.entry is not None else ''


class AssignmentStatusSerializer(serializers.Serializer):
    statuses = serializers.ListField(child=serializers.CharField())
    messages = serializers.ListField(child=serializers.CharField())
    booked_hours = serializers.SerializerMethodField()
    assignment = serializers.IntegerField(source='assignment.pk')

    def get_booked_hours(self, obj):
        return _as_float(obj.booked_hours)


class TimesheetRowSerializer(serializers.Serializer):
    assignment = serializers.IntegerField(source='assignment.pk')
    project = serializers.CharField(source='assignment.project.name')
    project_code = serializers.CharField(source='assignment.project.project_code')
    role = serializers.CharField(source='assignment.role')
    cells = serializers.SerializerMethodField()
    total_hours = serializers.SerializerMethodField()
    status = AssignmentStatusSerializer(allow_null=True)

    def get_cells(self, obj):
        return [TimesheetCellSerializer(cell).data if cell is not None else None for cell in obj.cells]

    def get_total_hours(self, obj):
        return _as_float(obj.total_hours)


def serialize_timesheet(timesheet, config):
    """Render a timesheet with its navigation, customers, rows and totals"""
    week_start = timesheet.week_start
    week_end = timesheet.week_end

    # totals follow the on screen order of the days
    day_order = [timesheet_date.day_in_week for timesheet_date in timesheet.timesheet_dates]

    return {
        'title': get_message(
            'timesheet.weekTitle',
            get_week_number(week_start, config.first_day_of_week),
            week_start.strftime(config.date_format),
            week_end.strftime(config.date_format),
        ),
        'week_start': week_start.isoformat(),
        'week_end': week_end.isoformat(),
        'navigation': {
            'previous_week': (week_start - timedelta(weeks=1)).isoformat(),
            'next_week': (week_start + timedelta(weeks=1)).isoformat(),
        },
        'employee': timesheet.employee.employee_id,
        'dates': TimesheetDateSerializer(timesheet.timesheet_dates, many=True).data,
        'customers': [
            {
                'id': customer.pk,
                'name': customer.name,
                'code': customer.code,
                'rows': TimesheetRowSerializer(timesheet.rows_for(customer), many=True).data,
            }
            for customer in timesheet.customer_list
        ],
        'day_totals': [_as_float(timesheet.day_total(day)) for day in day_order],
        'remaining_hours': [_as_float(timesheet.remaining_hours_for_day(day)) for day in day_order],
        'grand_total': _as_float(timesheet.grand_total),
        'max_hours_per_day': timesheet.max_hours_per_day,
        'comment': timesheet.comment.comment if timesheet.comment else '',
        'confirm_reset': get_message('timesheet.confirmReset'),
    }


class TimesheetEntryInputSerializer(serializers.Serializer):
    assignment = serializers.IntegerField()
    date = serializers.DateField()
    hours = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=24,
        required=False, allow_null=True
    )
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class TimesheetSubmitSerializer(serializers.Serializer):
    """Cells and comment of a submitted timesheet form"""
    week_start = serializers.DateField()
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    entries = TimesheetEntryInputSerializer(many=True, required=False, default=list)

    def validate(self, data):
        week_start = data['week_start']
        week_end = week_start + timedelta(days=DAYS_IN_WEEK - 1)

        outside = [
            entry['date'].isoformat() for entry in data['entries']
            if not week_start <= entry['date'] <= week_end
        ]
        if outside:
            raise serializers.ValidationError({'entries': f"Dates outside the submitted week: {outside}"})

        seen = set()
        duplicates = []
        for entry in data['entries']:
            key = (entry['assignment'], entry['date'])
            if key in seen:
                duplicates.append(f"{entry['assignment']} on {entry['date'].isoformat()}")
            seen.add(key)

        if duplicates:
            raise serializers.ValidationError({'entries': f"Cells submitted more than once: {duplicates}"})

        return data


class TimesheetLockSerializer(serializers.ModelSerializer):
    days = serializers.SerializerMethodField()

    class Meta:
        model = TimesheetLock
        fields = ['id', 'name', 'date_start', 'date_end', 'days']

    def get_days(self, obj):
        return (obj.date_end - obj.date_start).days + 1

    def validate(self, data):
        date_start = data.get('date_start', getattr(self.instance, 'date_start', None))
        date_end = data.get('date_end', getattr(self.instance, 'date_end', None))

        if date_start and date_end and date_end < date_start:
            raise serializers.ValidationError({'date_end': 'End date must not be before the start date.'})

        return data
