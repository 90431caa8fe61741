"""
Representation of a week's timesheet as shown on the timesheet form.

A ``Timesheet`` holds one ``TimesheetRow`` per assignment, grouped by
customer. Every row has seven ``TimesheetCell`` slots indexed by the day in
the week (0 = Sunday ... 6 = Saturday).
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from employees.models import Employee
from projects.models import Customer, ProjectAssignment
from .models import TimesheetComment, TimesheetEntry

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class TimesheetDate:
    date: date
    day_in_week: int
    formatted: str
    locked: bool


@dataclass(frozen=True)
class LockableDate:
    locked: bool
    date: date


@dataclass
class TimesheetCell:
    date: date
    entry: Optional[TimesheetEntry] = None
    valid: bool = False
    locked: bool = False

    @property
    def hours(self):
        if self.entry is None:
            return None
        return self.entry.hours

    @property
    def is_editable(self):
        return self.valid and not self.locked


class TimesheetRow:

    def __init__(self, assignment: ProjectAssignment, timesheet=None):
        self.assignment = assignment
        self.timesheet = timesheet
        self.cells: List[Optional[TimesheetCell]] = [None] * DAYS_IN_WEEK
        self.status = None

    def __repr__(self):
        return f"<TimesheetRow assignment={self.assignment.pk}>"

    def add_cell(self, day_in_week, cell):
        self.cells[day_in_week] = cell

    @property
    def project(self):
        return self.assignment.project

    @property
    def customer(self):
        return self.assignment.project.customer

    @property
    def timesheet_entries(self):
        return [cell.entry for cell in self.cells if cell is not None and cell.entry is not None]

    @property
    def total_hours(self):
        return sum((entry.hours for entry in self.timesheet_entries if entry.hours is not None), Decimal(0))


def row_sort_key(row):
    project = row.assignment.project
    return (project.name.lower(), project.project_code.lower(), row.assignment.pk or 0)


@dataclass
class Timesheet:
    customers: Dict[Customer, List[TimesheetRow]] = field(default_factory=dict)
    timesheet_dates: List[TimesheetDate] = field(default_factory=list)
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    employee: Optional[Employee] = None
    comment: Optional[TimesheetComment] = None
    max_hours_per_day: float = 8.0

    def _rows(self):
        for rows in self.customers.values():
            yield from rows

    def update_failed_projects(self, failed_statuses):
        """Mark the rows of assignments which could not be persisted"""
        for row in self._rows():
            row.status = None

        for status in failed_statuses:
            self._set_assignment_status(status)

    def _set_assignment_status(self, status):
        for row in self._rows():
            if row.assignment.pk == status.assignment.pk:
                row.status = status
                return

    def comment_for_persist(self):
        if self.comment.pk is None:
            self.comment.employee = self.employee
            self.comment.comment_date = self.week_start

        return self.comment

    @property
    def timesheet_entries(self):
        entries = []

        for row in self._rows():
            entries.extend(row.timesheet_entries)

        return entries

    @property
    def customer_list(self):
        return list(self.customers.keys())

    def rows_for(self, customer):
        return self.customers.get(customer, [])

    def day_total(self, day):
        """Hours booked on a day in the week, summed over every customer"""
        total = Decimal(0)

        for row in self._rows():
            cell = row.cells[day]

            if cell is not None and cell.hours is not None:
                total += cell.hours

        return total

    def remaining_hours_for_day(self, day):
        return Decimal(str(self.max_hours_per_day)) - self.day_total(day)

    @property
    def total_booked_hours(self):
        return sum((self.day_total(day) for day in range(DAYS_IN_WEEK)), Decimal(0))

    grand_total = total_booked_hours

    @property
    def lockable_dates(self):
        return [LockableDate(locked=d.locked, date=d.date) for d in self.timesheet_dates]
