import json
import logging
from datetime import date, datetime

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db import transaction
from django.views.decorators.csrf import csrf_exempt
from django.http import JsonResponse
from ehour_backend.config import get_config
from ehour_backend.resources import get_message
from employees.roles import get_employee, is_admin
from .factory import TimesheetFactory
from .models import TimesheetLock
from .serializers import (
    AssignmentStatusSerializer, TimesheetLockSerializer, TimesheetSubmitSerializer, serialize_timesheet
)
from .services import EntryInput, get_week_overview, persist_timesheet

logger = logging.getLogger(__name__)


def build_timesheet(employee, day, config):
    overview = get_week_overview(employee, day, config)
    return TimesheetFactory(config, overview).create_timesheet()


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def timesheet_week(request):
    """
    GET: The timesheet form of the week holding ?week=YYYY-MM-DD (default today)
    POST: Persist the submitted timesheet form
    """
    employee = get_employee(request.user)
    if employee is None:
        return Response({'error': 'User does not have an employee record'}, status=400)

    config = get_config()

    if request.method == 'GET':
        week_param = request.GET.get('week')
        if week_param:
            try:
                day = datetime.strptime(week_param, '%Y-%m-%d').date()
            except ValueError:
                return Response({'error': 'Invalid week format. Use YYYY-MM-DD'}, status=400)
        else:
            day = date.today()

        timesheet = build_timesheet(employee, day, config)
        return Response({'timesheet': serialize_timesheet(timesheet, config)})

    serializer = TimesheetSubmitSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({
            'error': 'Invalid request data',
            'details': serializer.errors
        }, status=400)

    week_start = serializer.validated_data['week_start']
    timesheet = build_timesheet(employee, week_start, config)

    if timesheet.week_start != week_start:
        return Response({
            'error': 'Invalid request data',
            'details': {'week_start': f"Weeks start on {timesheet.week_start.isoformat()}"}
        }, status=400)

    entry_inputs = [
        EntryInput(
            assignment_id=entry['assignment'],
            entry_date=entry['date'],
            hours=entry.get('hours'),
            comment=entry.get('comment', ''),
        )
        for entry in serializer.validated_data['entries']
    ]

    failed_projects = persist_timesheet(timesheet, entry_inputs, serializer.validated_data['comment'])

    timesheet = build_timesheet(employee, week_start, config)
    timesheet.update_failed_projects(failed_projects)

    if failed_projects:
        return Response({
            'error': get_message('timesheet.errorPersist'),
            'failed_projects': AssignmentStatusSerializer(failed_projects, many=True).data,
            'timesheet': serialize_timesheet(timesheet, config),
        }, status=400)

    return Response({
        'message': get_message(
            'timesheet.weekSaved',
            float(timesheet.total_booked_hours),
            timesheet.week_start.strftime(config.date_format),
            timesheet.week_end.strftime(config.date_format),
        ),
        'timesheet': serialize_timesheet(timesheet, config),
    })


@csrf_exempt
def lock_list_create(request):
    """
    GET: List timesheet locks
    POST: Lock a period (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if request.method == 'GET':
        locks = TimesheetLock.objects.all()
        return JsonResponse({
            'count': locks.count(),
            'locks': TimesheetLockSerializer(locks, many=True).data
        })

    elif request.method == 'POST':
        if not is_admin(request.user):
            return JsonResponse({'error': 'Permission denied'}, status=403)

        try:
            data = json.loads(request.body)
        except ValueError as e:
            return JsonResponse({'error': 'Invalid JSON', 'details': str(e)}, status=400)

        serializer = TimesheetLockSerializer(data=data)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            lock = serializer.save()

        logger.info("Locked %s - %s", lock.date_start, lock.date_end)
        return JsonResponse({
            'message': get_message('admin.lock.saved'),
            'lock': TimesheetLockSerializer(lock).data
        }, status=201)

    return JsonResponse({'error': 'Method not allowed'}, status=405)


@csrf_exempt
def lock_detail(request, pk):
    """
    GET: Retrieve lock
    PUT: Update lock (admin only)
    DELETE: Unlock the period (admin only)
    """
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    try:
        lock = TimesheetLock.objects.get(pk=pk)
    except TimesheetLock.DoesNotExist:
        return JsonResponse({'error': 'Lock not found'}, status=404)

    if request.method == 'GET':
        return JsonResponse({'lock': TimesheetLockSerializer(lock).data})

    if not is_admin(request.user):
        return JsonResponse({'error': 'Permission denied'}, status=403)

    if request.method == 'PUT':
        try:
            data = json.loads(request.body)
        except ValueError as e:
            return JsonResponse({'error': 'Invalid JSON', 'details': str(e)}, status=400)

        serializer = TimesheetLockSerializer(lock, data=data, partial=True)
        if not serializer.is_valid():
            return JsonResponse(serializer.errors, status=400)

        with transaction.atomic():
            lock = serializer.save()

        return JsonResponse({
            'message': get_message('admin.lock.saved'),
            'lock': TimesheetLockSerializer(lock).data
        })

    elif request.method == 'DELETE':
        with transaction.atomic():
            lock.delete()

        logger.info("Removed lock %s", pk)
        return JsonResponse({'message': get_message('admin.lock.deleted')})

    return JsonResponse({'error': 'Method not allowed'}, status=405)
