from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from employees.roles import can_view_all_reports, get_employee


class CriteriaError(ValueError):
    pass


@dataclass
class ReportCriteria:
    date_start: date
    date_end: date
    customer_ids: List[int] = field(default_factory=list)
    project_ids: List[int] = field(default_factory=list)
    employee_ids: List[int] = field(default_factory=list)
    department_ids: List[int] = field(default_factory=list)
    only_active_projects: bool = False
    for_individual_user: bool = False

    @property
    def is_for_individual_user(self):
        return self.for_individual_user


def _parse_date(value, name):
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise CriteriaError(f"Invalid {name} format. Use YYYY-MM-DD")


def _parse_ids(values, name):
    try:
        return [int(value) for value in values]
    except ValueError:
        raise CriteriaError(f"Invalid {name}, expected numeric ids")


def criteria_from_query(params, user, today: Optional[date] = None):
    """
    Build report criteria from query parameters.

    Users without report rights only ever report on themselves.
    """
    today = today or date.today()

    date_from = params.get('date_from')
    date_to = params.get('date_to')
    date_start = _parse_date(date_from, 'date_from') if date_from else today.replace(day=1)
    date_end = _parse_date(date_to, 'date_to') if date_to else today

    if date_end < date_start:
        raise CriteriaError('date_to must not be before date_from')

    criteria = ReportCriteria(
        date_start=date_start,
        date_end=date_end,
        customer_ids=_parse_ids(params.getlist('customer'), 'customer'),
        project_ids=_parse_ids(params.getlist('project'), 'project'),
        employee_ids=_parse_ids(params.getlist('employee'), 'employee'),
        department_ids=_parse_ids(params.getlist('department'), 'department'),
        only_active_projects=params.get('only_active_projects', '').lower() == 'true',
    )

    if not can_view_all_reports(user):
        employee = get_employee(user)
        if employee is None:
            raise CriteriaError('User does not have an employee record')

        criteria.employee_ids = [employee.pk]
        criteria.department_ids = []
        criteria.for_individual_user = True
    elif len(criteria.employee_ids) == 1:
        criteria.for_individual_user = True

    return criteria
