"""
Customer, project and assignment endpoint tests.
"""
from decimal import Decimal

import pytest

from projects.models import Customer, Project, ProjectAssignment

PROJECTS_URL = '/api/projects/'


@pytest.mark.django_db
class TestProjectViews:

    def test_filter_by_customer(self, api_client, project):
        other = Customer.objects.create(name='Globex', code='GLX')
        Project.objects.create(customer=other, name='Intranet', project_code='GLX-INT')

        response = api_client.get(PROJECTS_URL, {'customer': project.customer_id})

        assert response.status_code == 200
        assert [p['project_code'] for p in response.json()['projects']] == ['ACME-WEB']

    def test_non_numeric_customer_is_rejected(self, api_client, project):
        response = api_client.get(PROJECTS_URL, {'customer': 'abc'})

        assert response.status_code == 400
        assert response.json()['details'] == 'Invalid customer, expected numeric ids'

    def test_default_projects(self, api_client, project, customer):
        Project.objects.create(customer=customer, name='Holidays', project_code='ACME-HOL', is_default=True)

        response = api_client.get(PROJECTS_URL, {'default': 'true'})

        assert [p['name'] for p in response.json()['projects']] == ['Holidays']

    def test_admin_creates_project(self, admin_api_client, customer, employee):
        response = admin_api_client.post(PROJECTS_URL, {
            'customer': customer.pk,
            'name': 'Mobile app',
            'project_code': 'ACME-APP',
            'project_manager': employee.pk,
        }, format='json')

        assert response.status_code == 201
        assert response.json()['project']['project_manager_name'] == 'Alice Tester'

    def test_employee_cannot_create_project(self, api_client, customer):
        response = api_client.post(PROJECTS_URL, {'customer': customer.pk, 'name': 'X', 'project_code': 'X'},
                                   format='json')
        assert response.status_code == 403

    def test_managed_projects(self, api_client, project, employee):
        project.project_manager = employee
        project.save()

        response = api_client.get(f"{PROJECTS_URL}managed/")

        assert [p['id'] for p in response.json()['projects']] == [project.pk]


@pytest.mark.django_db
class TestAssignmentViews:

    def test_employee_sees_own_assignments(self, api_client, assignment, make_employee, project):
        ProjectAssignment.objects.create(employee=make_employee('bob'), project=project)

        response = api_client.get(f"{PROJECTS_URL}assignments/")

        assert response.json()['count'] == 1
        assert response.json()['assignments'][0]['id'] == assignment.pk

    def test_flex_assignment_needs_overrun(self, admin_api_client, employee, project):
        response = admin_api_client.post(f"{PROJECTS_URL}assignments/", {
            'employee': employee.pk,
            'project': project.pk,
            'assignment_type': ProjectAssignment.TYPE_FLEX,
            'allotted_hours': '40',
        }, format='json')

        assert response.status_code == 400
        assert 'allotted_hours_overrun' in response.json()

    def test_admin_assigns_employee(self, admin_api_client, employee, project):
        response = admin_api_client.post(f"{PROJECTS_URL}assignments/", {
            'employee': employee.pk,
            'project': project.pk,
            'date_start': '2025-08-01',
            'hourly_rate': '85.00',
        }, format='json')

        assert response.status_code == 201
        assert ProjectAssignment.objects.get().hourly_rate == Decimal('85.00')

    def test_non_numeric_filters_are_rejected(self, admin_api_client, assignment):
        for params in ({'employee': 'abc'}, {'project': 'abc'}):
            response = admin_api_client.get(f"{PROJECTS_URL}assignments/", params)

            assert response.status_code == 400
            assert response.json()['error'] == 'Invalid query parameter'
