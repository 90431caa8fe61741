from ehour_backend.resources import get_message
from .models import Employee

# Roles granting each right. Administrators hold every right.
REPORT_ROLES = {Employee.ROLE_REPORT, Employee.ROLE_MANAGER, Employee.ROLE_ADMIN}
PROJECT_MANAGEMENT_ROLES = {Employee.ROLE_PROJECTMANAGER, Employee.ROLE_MANAGER, Employee.ROLE_ADMIN}
ADMIN_ROLES = {Employee.ROLE_ADMIN}


def resource_key_for_role(role):
    return f"userRole.{role}"


def render_role(role):
    """Localised label for a user role"""
    return get_message(resource_key_for_role(role))


def get_employee(user):
    """The employee linked to a django user, None when there is none"""
    try:
        return user.employee
    except Employee.DoesNotExist:
        return None


def user_has_role(user, roles):
    if not user or not user.is_authenticated:
        return False

    if user.is_superuser:
        return True

    employee = get_employee(user)
    return employee is not None and employee.is_active and employee.role in roles


def is_admin(user):
    return bool(user and user.is_authenticated and user.is_staff) or user_has_role(user, ADMIN_ROLES)


def can_view_all_reports(user):
    return is_admin(user) or user_has_role(user, REPORT_ROLES)
