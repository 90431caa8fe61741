"""
Backup export and restore tests.
"""
import json
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.core.files.uploadedfile import SimpleUploadedFile

from backup.fields import FieldDefinition, IgnorableFieldDefinition, field_definitions_for
from backup.service import BACKUP_FORMAT_VERSION, BackupService, RestoreError
from employees.models import Employee
from projects.models import Project, ProjectAssignment
from timesheets.models import TimesheetEntry, TimesheetLock


def test_field_classification():
    employee_fields = field_definitions_for(Employee)
    user_fields = field_definitions_for(User)

    assert isinstance(employee_fields['created_at'], IgnorableFieldDefinition)
    assert isinstance(employee_fields['updated_at'], IgnorableFieldDefinition)
    assert isinstance(employee_fields['department_id'], FieldDefinition)
    assert not employee_fields['department_id'].is_ignorable()
    assert user_fields['last_login'].is_ignorable()
    assert not user_fields['password'].is_ignorable()


def test_field_conversion():
    fields = field_definitions_for(TimesheetEntry)

    assert fields['hours'].to_python('7.50') == Decimal('7.50')
    assert fields['entry_date'].to_python('2025-08-04') == date(2025, 8, 4)
    assert fields['hours'].to_python(None) is None


@pytest.mark.django_db
class TestBackupService:

    @pytest.fixture
    def entry(self, assignment):
        return TimesheetEntry.objects.create(
            assignment=assignment, entry_date=date(2025, 8, 4), hours=Decimal('7.5'), comment='Kick off'
        )

    def test_export(self, entry):
        document = BackupService().export()

        assert document['version'] == BACKUP_FORMAT_VERSION
        entries = document['tables']['timesheets.timesheetentry']
        assert len(entries) == 1
        assert entries[0]['assignment_id'] == entry.assignment_id
        assert entries[0]['entry_date'] == date(2025, 8, 4)
        assert entries[0]['hours'] == Decimal('7.50')

    def test_restore_replaces_content(self, entry):
        document = json.loads(json.dumps(BackupService().export(), default=str))

        TimesheetEntry.objects.all().delete()
        TimesheetLock.objects.create(date_start=date(2025, 7, 1), date_end=date(2025, 7, 31))

        result = BackupService().restore(document)

        assert result.warnings == []
        assert result.inserted['timesheets.timesheetentry'] == 1
        assert result.inserted['timesheets.timesheetlock'] == 0
        assert not TimesheetLock.objects.exists()

        restored = TimesheetEntry.objects.get()
        assert restored.pk == entry.pk
        assert restored.hours == Decimal('7.50')
        assert restored.comment == 'Kick off'
        assert restored.assignment.project.project_code == 'ACME-WEB'
        assert User.objects.get(username='alice').check_password('secret-password')

    def test_restored_rows_keep_accepting_new_rows(self, entry):
        document = BackupService().export()

        BackupService().restore(document)
        project = Project.objects.get()
        extra = ProjectAssignment.objects.create(employee=Employee.objects.get(), project=project)

        assert extra.pk > entry.assignment_id

    def test_unknown_tables_and_columns_are_reported(self, entry):
        document = BackupService().export()
        document['tables']['legacy.config'] = [{'key': 'value'}]
        document['tables']['timesheets.timesheetentry'][0]['approved'] = True

        result = BackupService().restore(document)

        assert 'Skipped unknown table legacy.config' in result.warnings
        assert 'Skipped unknown column timesheets.timesheetentry.approved' in result.warnings
        assert TimesheetEntry.objects.count() == 1

    def test_rejects_other_versions(self, entry):
        document = BackupService().export()
        document['version'] = BACKUP_FORMAT_VERSION + 1

        with pytest.raises(RestoreError):
            BackupService().restore(document)

        assert TimesheetEntry.objects.count() == 1

    def test_rejects_invalid_values(self, entry):
        document = BackupService().export()
        document['tables']['timesheets.timesheetentry'][0]['entry_date'] = 'someday'

        with pytest.raises(RestoreError):
            BackupService().restore(document)

    def test_rejects_non_backups(self):
        with pytest.raises(RestoreError):
            BackupService().restore(['not', 'a', 'backup'])


@pytest.mark.django_db
class TestBackupViews:

    def test_export_requires_admin(self, api_client):
        assert api_client.get('/api/backup/export/').status_code == 403

    def test_export_download(self, admin_api_client, assignment):
        response = admin_api_client.get('/api/backup/export/')

        assert response.status_code == 200
        assert response['Content-Disposition'].startswith('attachment; filename="ehour-backup-')
        document = json.loads(response.content)
        assert len(document['tables']['projects.projectassignment']) == 1

    def test_restore_upload(self, admin_api_client, assignment):
        payload = admin_api_client.get('/api/backup/export/').content
        upload = SimpleUploadedFile('backup.json', payload, content_type='application/json')

        response = admin_api_client.post('/api/backup/restore/', {'file': upload}, format='multipart')

        assert response.status_code == 200
        assert response.json()['inserted']['projects.projectassignment'] == 1

    def test_restore_rejects_bad_document(self, admin_api_client):
        response = admin_api_client.post(
            '/api/backup/restore/', {'version': 99, 'tables': {}}, format='json'
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'Restore failed'

    def test_restore_requires_admin(self, api_client):
        assert api_client.post('/api/backup/restore/', {}, format='json').status_code == 403
