import json
import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db import transaction
from django.db.models import ProtectedError
from django.views.decorators.csrf import csrf_exempt
from django.http import JsonResponse
from employees.models import Employee
from employees.roles import is_admin, get_employee
from .models import Customer, Project, ProjectAssignment
from .serializers import (
    CustomerSerializer, ProjectSerializer, ProjectListSerializer, ProjectAssignmentSerializer
)

logger = logging.getLogger(__name__)


def _parse_body(request):
    try:
        return json.loads(request.body), None
    except ValueError as e:
        return None, JsonResponse({'error': 'Invalid JSON', 'details': str(e)}, status=400)


def _parse_ids(values, name):
    """Numeric ids from query parameter values"""
    try:
        return [int(value) for value in values], None
    except ValueError:
        return None, JsonResponse({
            'error': 'Invalid query parameter',
            'details': f"Invalid {name}, expected numeric ids"
        }, status=400)


@csrf_exempt
def customer_list_create(request):
    """
    GET: List customers
    POST: Create customer (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if request.method == 'GET':
        customers = Customer.objects.all()

        is_active = request.GET.get('is_active')
        if is_active is not None:
            customers = customers.filter(is_active=is_active.lower() == 'true')

        return JsonResponse({
            'count': customers.count(),
            'customers': CustomerSerializer(customers, many=True).data
        })

    elif request.method == 'POST':
        if not is_admin(request.user):
            return JsonResponse({'error': 'Permission denied'}, status=403)

        data, error = _parse_body(request)
        if error:
            return error

        serializer = CustomerSerializer(data=data)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            customer = serializer.save()

        return JsonResponse({
            'message': 'Customer created successfully',
            'customer': CustomerSerializer(customer).data
        }, status=201)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@csrf_exempt
def project_list_create(request):
    """
    GET: List projects
    POST: Create project (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if request.method == 'GET':
        customer_ids, error = _parse_ids(request.GET.getlist('customer'), 'customer')
        if error:
            return error

        only_active = request.GET.get('active', '').lower() == 'true'

        if customer_ids:
            customers = Customer.objects.filter(pk__in=customer_ids)
            projects = Project.objects.find_projects_for_customers(customers, only_active)
        elif request.GET.get('default', '').lower() == 'true':
            projects = Project.objects.find_default_projects()
        elif only_active:
            projects = Project.objects.find_all_active()
        else:
            projects = Project.objects.find_all()

        search = request.GET.get('search')
        if search:
            projects = projects.filter(name__icontains=search)

        return JsonResponse({
            'count': projects.count(),
            'projects': ProjectListSerializer(projects, many=True).data
        })

    elif request.method == 'POST':
        if not is_admin(request.user):
            return JsonResponse({'error': 'Permission denied'}, status=403)

        data, error = _parse_body(request)
        if error:
            return error

        serializer = ProjectSerializer(data=data)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            project = serializer.save()

        logger.info("Created project %s", project.project_code)
        return JsonResponse({
            'message': 'Project created successfully',
            'project': ProjectSerializer(project).data
        }, status=201)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@csrf_exempt
def project_detail(request, pk):
    """
    GET: Retrieve project by ID
    PUT: Update project (admin only)
    DELETE: Delete project (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    try:
        project = Project.objects.find_all().get(pk=pk)
    except Project.DoesNotExist:
        return JsonResponse({'error': 'Project not found'}, status=404)

    if request.method == 'GET':
        return JsonResponse({
            'project': ProjectSerializer(project).data
        })

    if not is_admin(request.user):
        return JsonResponse({'error': 'Permission denied'}, status=403)

    if request.method == 'PUT':
        data, error = _parse_body(request)
        if error:
            return error

        serializer = ProjectSerializer(project, data=data, partial=True)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            project = serializer.save()

        return JsonResponse({
            'message': 'Project updated successfully',
            'project': ProjectSerializer(project).data
        })

    elif request.method == 'DELETE':
        try:
            with transaction.atomic():
                project.delete()
        except ProtectedError as e:
            return JsonResponse({
                'error': 'Failed to delete project',
                'details': str(e)
            }, status=400)

        return JsonResponse({
            'message': 'Project deleted successfully'
        }, status=204)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def managed_projects(request):
    """Active projects where the current user is project manager"""
    employee = get_employee(request.user)
    if employee is None:
        return Response({'error': 'User does not have an employee record'}, status=400)

    projects = Project.objects.find_active_projects_where_user_is_pm(employee)
    return Response({
        'projects': ProjectListSerializer(projects, many=True).data
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def projects_with_pm(request):
    projects = Project.objects.find_all_projects_with_pm_set()
    return Response({
        'projects': ProjectSerializer(projects, many=True).data
    })


@csrf_exempt
def assignment_list_create(request):
    """
    GET: List assignments, own assignments unless admin
    POST: Assign an employee to a project (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if request.method == 'GET':
        assignments = ProjectAssignment.objects.select_related(
            'employee', 'project', 'project__customer'
        ).all()

        if is_admin(request.user):
            employee_ids, error = _parse_ids(request.GET.getlist('employee'), 'employee')
            if error:
                return error
            if employee_ids:
                assignments = assignments.filter(employee_id__in=employee_ids)
        else:
            employee = get_employee(request.user)
            if employee is None:
                return JsonResponse({'error': 'User does not have an employee record'}, status=400)
            assignments = assignments.filter(employee=employee)

        project_ids, error = _parse_ids(request.GET.getlist('project'), 'project')
        if error:
            return error
        if project_ids:
            assignments = assignments.filter(project_id__in=project_ids)

        return JsonResponse({
            'count': assignments.count(),
            'assignments': ProjectAssignmentSerializer(assignments, many=True).data
        })

    elif request.method == 'POST':
        if not is_admin(request.user):
            return JsonResponse({'error': 'Permission denied'}, status=403)

        data, error = _parse_body(request)
        if error:
            return error

        serializer = ProjectAssignmentSerializer(data=data)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            assignment = serializer.save()

        logger.info("Assigned %s to project %s", assignment.employee.employee_id, assignment.project.project_code)
        return JsonResponse({
            'message': 'Assignment created successfully',
            'assignment': ProjectAssignmentSerializer(assignment).data
        }, status=201)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def project_choices(request):
    """Get choices for dropdowns"""
    return Response({
        'assignment_types': dict(ProjectAssignment.TYPE_CHOICES),
        'project_managers': [
            {'id': employee.id, 'full_name': employee.full_name}
            for employee in Employee.objects.filter(is_active=True)
        ]
    })
