import json
import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db import transaction
from django.views.decorators.csrf import csrf_exempt
from django.http import JsonResponse
from .models import Employee, Department
from .roles import is_admin, get_employee, render_role
from .serializers import EmployeeSerializer, EmployeeListSerializer, DepartmentSerializer

logger = logging.getLogger(__name__)


@csrf_exempt
def employee_list_create(request):
    """
    GET: List all employees
    POST: Create new employee (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if request.method == 'GET':
        employees = Employee.objects.select_related('department', 'user').all()

        department = request.GET.get('department')
        if department:
            employees = employees.filter(department__code=department)

        role = request.GET.get('role')
        if role:
            employees = employees.filter(role=role)

        is_active = request.GET.get('is_active')
        if is_active is not None:
            employees = employees.filter(is_active=is_active.lower() == 'true')

        serializer = EmployeeListSerializer(employees, many=True)
        return JsonResponse({
            'count': employees.count(),
            'employees': serializer.data
        })

    elif request.method == 'POST':
        if not is_admin(request.user):
            return JsonResponse({'error': 'Permission denied'}, status=403)

        try:
            data = json.loads(request.body)
        except ValueError as e:
            return JsonResponse({'error': 'Invalid JSON', 'details': str(e)}, status=400)

        serializer = EmployeeSerializer(data=data)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            employee = serializer.save()

        logger.info("Created employee %s", employee.employee_id)
        return JsonResponse({
            'message': 'Employee created successfully',
            'employee': EmployeeSerializer(employee).data
        }, status=201)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@csrf_exempt
def employee_detail(request, pk):
    """
    GET: Retrieve employee by ID
    PUT: Update employee (admin only)
    DELETE: Delete employee (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    try:
        employee = Employee.objects.select_related('department', 'user').get(pk=pk)
    except Employee.DoesNotExist:
        return JsonResponse({'error': 'Employee not found'}, status=404)

    if request.method == 'GET':
        return JsonResponse({
            'employee': EmployeeSerializer(employee).data
        })

    if not is_admin(request.user):
        return JsonResponse({'error': 'Permission denied'}, status=403)

    if request.method == 'PUT':
        try:
            data = json.loads(request.body)
        except ValueError as e:
            return JsonResponse({'error': 'Invalid JSON', 'details': str(e)}, status=400)

        serializer = EmployeeSerializer(employee, data=data, partial=True)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            employee = serializer.save()

        return JsonResponse({
            'message': 'Employee updated successfully',
            'employee': EmployeeSerializer(employee).data
        })

    elif request.method == 'DELETE':
        with transaction.atomic():
            # Delete associated user account
            user = employee.user
            employee.delete()
            user.delete()

        logger.info("Deleted employee %s", employee.employee_id)
        return JsonResponse({
            'message': 'Employee deleted successfully'
        }, status=204)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_employee(request):
    """Get current user's employee information for frontend"""
    employee = get_employee(request.user)
    if employee is None:
        return Response({
            'error': 'Current user is not linked to an employee record'
        }, status=400)

    return Response({
        'employee': EmployeeSerializer(employee).data,
        'is_admin': is_admin(request.user),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def employee_choices(request):
    """Get choices for dropdowns"""
    return Response({
        'roles': {role: render_role(role) for role, _ in Employee.ROLE_CHOICES},
        'departments': DepartmentSerializer(Department.objects.all(), many=True).data
    })
