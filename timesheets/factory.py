from .dto import Timesheet, TimesheetCell, TimesheetDate, TimesheetRow, row_sort_key
from .utils import create_date_sequence, day_in_week, format_date_key


class TimesheetFactory:
    """Generates the timesheet backing object"""

    def __init__(self, config, week_overview):
        self.config = config
        self.week_overview = week_overview

    def create_timesheet(self):
        overview = self.week_overview
        date_sequence = create_date_sequence(overview.week_start, overview.week_end)
        timesheet_dates = self._create_timesheet_dates(date_sequence, overview.locked_days)

        timesheet = Timesheet(max_hours_per_day=self.config.complete_day_hours)

        rows = self._create_timesheet_rows(
            overview.assignment_map, timesheet_dates, overview.assignments, timesheet
        )

        timesheet.customers = self._structure_rows_per_customer(rows)
        timesheet.timesheet_dates = timesheet_dates
        timesheet.week_start = overview.week_start
        timesheet.week_end = overview.week_end
        timesheet.comment = overview.comment
        timesheet.employee = overview.employee

        return timesheet

    def _create_timesheet_dates(self, date_sequence, locked_days):
        locked_keys = {format_date_key(day) for day in locked_days}

        return [
            TimesheetDate(
                date=day,
                day_in_week=day_in_week(day),
                formatted=format_date_key(day),
                locked=format_date_key(day) in locked_keys,
            )
            for day in date_sequence
        ]

    def _structure_rows_per_customer(self, rows):
        per_customer = {}

        for row in rows:
            per_customer.setdefault(row.customer, []).append(row)

        customers = sorted(per_customer, key=lambda customer: customer.sort_key)

        return {customer: sorted(per_customer[customer], key=row_sort_key) for customer in customers}

    def _create_timesheet_rows(self, assignment_map, timesheet_dates, valid_assignments, timesheet):
        rows = []
        valid_ids = {assignment.pk for assignment in valid_assignments}

        for assignment, entries in assignment_map.items():
            row = TimesheetRow(assignment, timesheet)

            for timesheet_date in timesheet_dates:
                cell = TimesheetCell(
                    date=timesheet_date.date,
                    entry=entries.get(timesheet_date.formatted),
                    valid=self._is_cell_valid(assignment, valid_ids, timesheet_date.date),
                    locked=timesheet_date.locked,
                )
                row.add_cell(timesheet_date.day_in_week, cell)

            rows.append(row)

        return rows

    @staticmethod
    def _is_cell_valid(assignment, valid_ids, day):
        # entries may exist on assignments which are no longer valid,
        # e.g. deactivated or over budget
        return assignment.pk in valid_ids and assignment.is_date_within_range(day)
