"""
Shared pytest fixtures for the eHour tests.
"""
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from employees.models import Employee
from projects.models import Customer, Project, ProjectAssignment



@pytest.fixture
def make_employee(db):
    """
    Factory creating an employee with a linked django user.
    """
    def _make(username, role=Employee.ROLE_CONSULTANT, **kwargs):
        user = User.objects.create_user(username=username, password='secret-password')
        kwargs.setdefault('first_name', username.capitalize())
        kwargs.setdefault('last_name', 'Tester')
        return Employee.objects.create(user=user, role=role, **kwargs)

    return _make


@pytest.fixture
def employee(make_employee):
    return make_employee('alice', email='alice@example.com')


@pytest.fixture
def admin_employee(make_employee):
    return make_employee('root', role=Employee.ROLE_ADMIN)


@pytest.fixture
def customer(db):
    return Customer.objects.create(name='Acme', code='ACME')


@pytest.fixture
def project(customer):
    return Project.objects.create(customer=customer, name='Website', project_code='ACME-WEB')


@pytest.fixture
def assignment(employee, project):
    return ProjectAssignment.objects.create(
        employee=employee,
        project=project,
        hourly_rate=Decimal('100.00'),
    )


@pytest.fixture
def api_client(employee):
    """
    API client logged in as the regular employee.
    """
    client = APIClient()
    client.force_login(employee.user)
    return client


@pytest.fixture
def admin_api_client(admin_employee):
    client = APIClient()
    client.force_login(admin_employee.user)
    return client
