import json
import logging

from django.core.serializers.json import DjangoJSONEncoder
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from employees.roles import is_admin
from .service import BackupService, RestoreError

logger = logging.getLogger(__name__)


def backup_export(request):
    """Download the database content as a JSON backup (admin only)"""
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if not is_admin(request.user):
        return JsonResponse({'error': 'Permission denied'}, status=403)

    if request.method != 'GET':
        return JsonResponse({'error': 'Method not allowed'}, status=405)

    document = BackupService().export()
    filename = f"ehour-backup-{timezone.now():%Y%m%d}.json"

    response = HttpResponse(
        json.dumps(document, cls=DjangoJSONEncoder, indent=2),
        content_type='application/json'
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@csrf_exempt
def backup_restore(request):
    """Replace the database content with an uploaded JSON backup (admin only)"""
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    if not is_admin(request.user):
        return JsonResponse({'error': 'Permission denied'}, status=403)

    if request.method != 'POST':
        return JsonResponse({'error': 'Method not allowed'}, status=405)

    upload = request.FILES.get('file')
    try:
        document = json.loads(upload.read() if upload else request.body)
    except ValueError as e:
        return JsonResponse({'error': 'Invalid JSON', 'details': str(e)}, status=400)

    try:
        result = BackupService().restore(document)
    except RestoreError as e:
        logger.warning("Restore failed: %s", e)
        return JsonResponse({'error': 'Restore failed', 'details': str(e)}, status=400)

    return JsonResponse({
        'message': 'Backup restored successfully',
        'inserted': result.inserted,
        'warnings': result.warnings,
    })
