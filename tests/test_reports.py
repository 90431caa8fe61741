"""
Report criteria, aggregation and tab tests.
"""
from datetime import date
from decimal import Decimal

import pytest
from django.http import QueryDict

from employees.models import Employee
from ehour_backend.config import EhourConfig
from projects.models import Customer, Project, ProjectAssignment
from reports.aggregates import customer_aggregate, detailed_report, employee_aggregate, project_aggregate
from reports.criteria import CriteriaError, ReportCriteria, criteria_from_query
from reports.tabs import DefaultReportTabBuilder
from timesheets.models import TimesheetEntry

REPORT_URL = '/api/reports/'
AUGUST = ReportCriteria(date_start=date(2025, 8, 1), date_end=date(2025, 8, 31))


@pytest.fixture
def booked(employee, make_employee, assignment):
    """
    Alice books 8 + 4 hours on Acme's website, Bob 5 hours on Globex'
    intranet, and a July entry falls outside the reported month.
    """
    bob = make_employee('bob')
    globex = Customer.objects.create(name='Globex', code='GLX')
    intranet = Project.objects.create(customer=globex, name='Intranet', project_code='GLX-INT')
    bob_assignment = ProjectAssignment.objects.create(employee=bob, project=intranet, hourly_rate=Decimal('50'))

    TimesheetEntry.objects.create(assignment=assignment, entry_date=date(2025, 8, 4), hours=Decimal('8'))
    TimesheetEntry.objects.create(assignment=assignment, entry_date=date(2025, 8, 5), hours=Decimal('4'),
                                  comment='Release')
    TimesheetEntry.objects.create(assignment=bob_assignment, entry_date=date(2025, 8, 4), hours=Decimal('5'))
    TimesheetEntry.objects.create(assignment=assignment, entry_date=date(2025, 7, 31), hours=Decimal('3'))

    return bob


class TestCriteria:

    @pytest.mark.django_db
    def test_defaults_to_current_month(self, admin_employee):
        criteria = criteria_from_query(QueryDict(), admin_employee.user, today=date(2025, 8, 20))

        assert criteria.date_start == date(2025, 8, 1)
        assert criteria.date_end == date(2025, 8, 20)
        assert not criteria.is_for_individual_user

    @pytest.mark.django_db
    def test_consultant_reports_on_self(self, employee, make_employee):
        other = make_employee('bob')
        params = QueryDict(f"employee={other.pk}&department=3")

        criteria = criteria_from_query(params, employee.user, today=date(2025, 8, 20))

        assert criteria.employee_ids == [employee.pk]
        assert criteria.department_ids == []
        assert criteria.is_for_individual_user

    @pytest.mark.django_db
    def test_report_role_can_select_employees(self, make_employee):
        reporter = make_employee('rita', role=Employee.ROLE_REPORT)

        criteria = criteria_from_query(QueryDict('employee=1&employee=2'), reporter.user)
        assert criteria.employee_ids == [1, 2]
        assert not criteria.is_for_individual_user

        criteria = criteria_from_query(QueryDict('employee=1'), reporter.user)
        assert criteria.is_for_individual_user

    @pytest.mark.django_db
    def test_rejects_bad_input(self, admin_employee):
        with pytest.raises(CriteriaError):
            criteria_from_query(QueryDict('date_from=01-08-2025'), admin_employee.user)

        with pytest.raises(CriteriaError):
            criteria_from_query(QueryDict('date_from=2025-08-10&date_to=2025-08-01'), admin_employee.user)

        with pytest.raises(CriteriaError):
            criteria_from_query(QueryDict('project=abc'), admin_employee.user)


@pytest.mark.django_db
class TestAggregates:

    def test_customer_aggregate(self, booked):
        rows = customer_aggregate(AUGUST)

        assert [row['customer'] for row in rows] == ['Acme', 'Globex']
        assert rows[0]['hours'] == 12.0
        assert rows[0]['turnover'] == 1200.0
        assert rows[1]['hours'] == 5.0
        assert rows[1]['turnover'] == 250.0

    def test_project_aggregate_filtered_by_customer(self, booked, customer):
        criteria = ReportCriteria(date_start=AUGUST.date_start, date_end=AUGUST.date_end,
                                  customer_ids=[customer.pk])

        rows = project_aggregate(criteria)

        assert len(rows) == 1
        assert rows[0]['project_code'] == 'ACME-WEB'
        assert rows[0]['hours'] == 12.0

    def test_employee_aggregate_without_turnover(self, booked):
        rows = employee_aggregate(AUGUST, show_turnover=False)

        assert [(row['first_name'], row['hours']) for row in rows] == [('Alice', 12.0), ('Bob', 5.0)]
        assert all('turnover' not in row for row in rows)

    def test_detailed_report(self, booked, employee):
        criteria = ReportCriteria(date_start=AUGUST.date_start, date_end=AUGUST.date_end,
                                  employee_ids=[employee.pk])

        rows = detailed_report(criteria)

        assert [row['date'] for row in rows] == ['2025-08-04', '2025-08-05']
        assert rows[1]['comment'] == 'Release'
        assert rows[1]['employee'] == 'Tester, Alice'
        assert rows[1]['turnover'] == 400.0

    def test_missing_rate_has_no_turnover(self, employee, project):
        unpaid = ProjectAssignment.objects.create(employee=employee, project=project)
        TimesheetEntry.objects.create(assignment=unpaid, entry_date=date(2025, 8, 4), hours=Decimal('2'))

        assert detailed_report(AUGUST)[0]['turnover'] is None
        assert customer_aggregate(AUGUST)[0]['turnover'] is None


@pytest.mark.django_db
class TestReportTabs:

    def test_all_tabs(self, booked):
        tabs = DefaultReportTabBuilder(EhourConfig()).create_report_tabs(AUGUST)

        assert [tab.key for tab in tabs] == ['customer', 'project', 'employee', 'detailed']
        assert tabs[0].title == 'Customer report'
        assert tabs[0].get_panel()['total_hours'] == 17.0

    def test_individual_user_has_no_employee_tab(self, booked, employee):
        criteria = ReportCriteria(date_start=AUGUST.date_start, date_end=AUGUST.date_end,
                                  employee_ids=[employee.pk], for_individual_user=True)

        tabs = DefaultReportTabBuilder(EhourConfig()).create_report_tabs(criteria)

        assert [tab.key for tab in tabs] == ['customer', 'project', 'detailed']

    def test_turnover_hidden_by_config(self, booked):
        tabs = DefaultReportTabBuilder(EhourConfig(show_turnover=False)).create_report_tabs(AUGUST)

        assert 'turnover' not in tabs[0].get_panel()['rows'][0]


@pytest.mark.django_db
class TestReportView:

    def test_consultant_sees_own_hours(self, api_client, booked):
        response = api_client.get(REPORT_URL, {'date_from': '2025-08-01', 'date_to': '2025-08-31'})

        assert response.status_code == 200
        body = response.json()
        assert body['for_individual_user'] is True
        assert [tab['key'] for tab in body['tabs']] == ['customer', 'project', 'detailed']
        assert body['tabs'][0]['panel']['total_hours'] == 12.0

    def test_only_requested_tab_is_rendered(self, admin_api_client, booked):
        response = admin_api_client.get(
            REPORT_URL, {'date_from': '2025-08-01', 'date_to': '2025-08-31', 'tab': 'employee'}
        )

        assert response.status_code == 200
        panels = {tab['key']: tab['panel'] for tab in response.json()['tabs']}
        assert panels['customer'] is None
        assert panels['employee']['total_hours'] == 17.0

    def test_unknown_tab(self, api_client):
        response = api_client.get(REPORT_URL, {'tab': 'employee'})
        assert response.status_code == 404

    def test_invalid_criteria(self, api_client):
        response = api_client.get(REPORT_URL, {'date_from': 'yesterday'})
        assert response.status_code == 400
