import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from ehour_backend.config import get_config
from .criteria import CriteriaError, criteria_from_query
from .tabs import DefaultReportTabBuilder

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def report_view(request):
    """
    Report tabs for the criteria in the query string.
    GET /api/reports/?date_from=2025-08-01&date_to=2025-08-31&tab=project
    """
    try:
        criteria = criteria_from_query(request.GET, request.user)
    except CriteriaError as e:
        return Response({'error': 'Invalid report criteria', 'details': str(e)}, status=400)

    tabs = DefaultReportTabBuilder(get_config()).create_report_tabs(criteria)

    requested = request.GET.get('tab')
    if requested and requested not in {tab.key for tab in tabs}:
        return Response({'error': f"Unknown report tab '{requested}'"}, status=404)

    logger.debug("Reporting %s - %s for %s", criteria.date_start, criteria.date_end, request.user)

    return Response({
        'date_start': criteria.date_start,
        'date_end': criteria.date_end,
        'for_individual_user': criteria.is_for_individual_user,
        'tabs': [
            {
                'key': tab.key,
                'title': tab.title,
                'panel': tab.get_panel() if not requested or tab.key == requested else None,
            }
            for tab in tabs
        ]
    })
