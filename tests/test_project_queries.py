"""
Tests for the project lookups on Project.objects and assignment validity.
"""
from datetime import date

import pytest

from projects.models import Customer, Project, ProjectAssignment


@pytest.fixture
def projects(customer, employee, make_employee):
    other_customer = Customer.objects.create(name='Globex', code='GLOBEX')
    manager = make_employee('bob')

    return {
        'website': Project.objects.create(customer=customer, name='Website', project_code='WEB',
                                          project_manager=employee),
        'holiday': Project.objects.create(customer=customer, name='Holiday', project_code='HOL',
                                          is_default=True),
        'archived': Project.objects.create(customer=customer, name='Archive', project_code='ARC',
                                           is_active=False, project_manager=employee),
        'globex': Project.objects.create(customer=other_customer, name='Portal', project_code='GLX',
                                         project_manager=manager),
        'other_customer': other_customer,
    }


@pytest.mark.django_db
class TestProjectQueries:

    def test_find_all(self, projects):
        assert Project.objects.find_all().count() == 4

    def test_find_all_active(self, projects):
        codes = set(Project.objects.find_all_active().values_list('project_code', flat=True))
        assert codes == {'WEB', 'HOL', 'GLX'}

    def test_find_default_projects(self, projects):
        assert list(Project.objects.find_default_projects()) == [projects['holiday']]

    def test_find_projects_for_customers_only_active(self, projects, customer):
        found = Project.objects.find_projects_for_customers([customer], only_active=True)
        assert set(found) == {projects['website'], projects['holiday']}

    def test_find_projects_for_customers_including_inactive(self, projects, customer):
        found = Project.objects.find_projects_for_customers([customer], only_active=False)
        assert set(found) == {projects['website'], projects['holiday'], projects['archived']}

    def test_find_active_projects_where_user_is_pm(self, projects, employee):
        found = Project.objects.find_active_projects_where_user_is_pm(employee)
        assert list(found) == [projects['website']]

    def test_find_all_projects_with_pm_set(self, projects):
        codes = set(Project.objects.find_all_projects_with_pm_set().values_list('project_code', flat=True))
        assert codes == {'WEB', 'ARC', 'GLX'}


@pytest.mark.django_db
class TestValidAssignments:

    def test_open_ended_assignment_is_valid(self, assignment, employee):
        found = ProjectAssignment.objects.valid_for(employee, date(2025, 8, 4), date(2025, 8, 10))
        assert list(found) == [assignment]

    def test_assignment_overlapping_week_is_valid(self, employee, project):
        assignment = ProjectAssignment.objects.create(
            employee=employee, project=project, date_start=date(2025, 8, 8), date_end=date(2025, 9, 1)
        )
        found = ProjectAssignment.objects.valid_for(employee, date(2025, 8, 4), date(2025, 8, 10))
        assert list(found) == [assignment]

    def test_ended_assignment_is_not_valid(self, employee, project):
        ProjectAssignment.objects.create(
            employee=employee, project=project, date_start=date(2025, 7, 1), date_end=date(2025, 8, 3)
        )
        found = ProjectAssignment.objects.valid_for(employee, date(2025, 8, 4), date(2025, 8, 10))
        assert not found.exists()

    def test_inactive_project_is_not_valid(self, assignment, employee, project):
        project.is_active = False
        project.save()
        found = ProjectAssignment.objects.valid_for(employee, date(2025, 8, 4), date(2025, 8, 10))
        assert not found.exists()

    def test_inactive_customer_is_not_valid(self, assignment, employee, customer):
        customer.is_active = False
        customer.save()
        found = ProjectAssignment.objects.valid_for(employee, date(2025, 8, 4), date(2025, 8, 10))
        assert not found.exists()

    def test_is_date_within_range(self, employee, project):
        assignment = ProjectAssignment(
            employee=employee, project=project, date_start=date(2025, 8, 5), date_end=date(2025, 8, 7)
        )
        assert not assignment.is_date_within_range(date(2025, 8, 4))
        assert assignment.is_date_within_range(date(2025, 8, 5))
        assert assignment.is_date_within_range(date(2025, 8, 7))
        assert not assignment.is_date_within_range(date(2025, 8, 8))
