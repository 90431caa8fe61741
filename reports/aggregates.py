from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from timesheets.models import TimesheetEntry

TURNOVER = ExpressionWrapper(
    F('hours') * F('assignment__hourly_rate'),
    output_field=DecimalField(max_digits=16, decimal_places=4)
)


def _as_float(value):
    return float(value) if value is not None else None


def report_entries(criteria):
    """Timesheet entries matching the report criteria"""
    entries = TimesheetEntry.objects.filter(
        entry_date__gte=criteria.date_start,
        entry_date__lte=criteria.date_end,
    )

    if criteria.customer_ids:
        entries = entries.filter(assignment__project__customer_id__in=criteria.customer_ids)
    if criteria.project_ids:
        entries = entries.filter(assignment__project_id__in=criteria.project_ids)
    if criteria.employee_ids:
        entries = entries.filter(assignment__employee_id__in=criteria.employee_ids)
    if criteria.department_ids:
        entries = entries.filter(assignment__employee__department_id__in=criteria.department_ids)
    if criteria.only_active_projects:
        entries = entries.filter(assignment__project__is_active=True)

    return entries


def _aggregate(criteria, group_by, order_by, names, show_turnover):
    rows = report_entries(criteria).values(*group_by).annotate(
        total_hours=Sum('hours'),
        total_turnover=Sum(TURNOVER),
    ).order_by(*order_by)

    report = []
    for row in rows:
        item = {name: row[column] for name, column in names.items()}
        item['hours'] = _as_float(row['total_hours'])
        if show_turnover:
            item['turnover'] = _as_float(row['total_turnover'])
        report.append(item)

    return report


def customer_aggregate(criteria, show_turnover=True):
    return _aggregate(
        criteria,
        group_by=['assignment__project__customer_id', 'assignment__project__customer__name',
                  'assignment__project__customer__code'],
        order_by=['assignment__project__customer__name', 'assignment__project__customer__code'],
        names={
            'customer_id': 'assignment__project__customer_id',
            'customer': 'assignment__project__customer__name',
            'customer_code': 'assignment__project__customer__code',
        },
        show_turnover=show_turnover,
    )


def project_aggregate(criteria, show_turnover=True):
    return _aggregate(
        criteria,
        group_by=['assignment__project_id', 'assignment__project__name',
                  'assignment__project__project_code', 'assignment__project__customer__name'],
        order_by=['assignment__project__customer__name', 'assignment__project__name'],
        names={
            'project_id': 'assignment__project_id',
            'project': 'assignment__project__name',
            'project_code': 'assignment__project__project_code',
            'customer': 'assignment__project__customer__name',
        },
        show_turnover=show_turnover,
    )


def employee_aggregate(criteria, show_turnover=True):
    return _aggregate(
        criteria,
        group_by=['assignment__employee_id', 'assignment__employee__first_name',
                  'assignment__employee__last_name'],
        order_by=['assignment__employee__last_name', 'assignment__employee__first_name'],
        names={
            'employee_id': 'assignment__employee_id',
            'first_name': 'assignment__employee__first_name',
            'last_name': 'assignment__employee__last_name',
        },
        show_turnover=show_turnover,
    )


def detailed_report(criteria, show_turnover=True):
    entries = report_entries(criteria).select_related(
        'assignment__employee', 'assignment__project', 'assignment__project__customer'
    ).order_by('entry_date', 'assignment__employee__last_name', 'assignment__project__name')

    report = []
    for entry in entries:
        assignment = entry.assignment
        item = {
            'date': entry.entry_date.isoformat(),
            'customer': assignment.project.customer.name,
            'project': assignment.project.name,
            'project_code': assignment.project.project_code,
            'employee': assignment.employee.full_name_last_first,
            'hours': _as_float(entry.hours),
            'comment': entry.comment,
        }
        if show_turnover:
            rate = assignment.hourly_rate
            item['turnover'] = _as_float(entry.hours * rate) if rate is not None else None
        report.append(item)

    return report
