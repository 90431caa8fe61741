import logging
from dataclasses import dataclass, field
from typing import Dict, List

from django.apps import apps
from django.core.exceptions import ValidationError
from django.core.management.color import no_style
from django.db import connection, transaction
from django.utils import timezone
from django.utils.encoding import is_protected_type
from .fields import field_definitions_for

logger = logging.getLogger(__name__)

BACKUP_FORMAT_VERSION = 1

# Backed up tables, parents before children
BACKUP_MODELS = [
    'auth.user',
    'employees.department',
    'employees.employee',
    'projects.customer',
    'projects.project',
    'projects.projectassignment',
    'timesheets.timesheetentry',
    'timesheets.timesheetcomment',
    'timesheets.timesheetlock',
]


class RestoreError(Exception):
    pass


@dataclass
class RestoreResult:
    inserted: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


class BackupService:

    def __init__(self, model_labels=None):
        self.models = [apps.get_model(label) for label in (model_labels or BACKUP_MODELS)]

    def export(self):
        tables = {}

        for model in self.models:
            fields = model._meta.concrete_fields
            rows = []

            for obj in model._default_manager.order_by('pk'):
                rows.append({f.attname: self._value(f, obj) for f in fields})

            tables[model._meta.label_lower] = rows

        logger.info("Exported backup of %d tables", len(tables))
        return {
            'version': BACKUP_FORMAT_VERSION,
            'created_at': timezone.now().isoformat(),
            'tables': tables,
        }

    @staticmethod
    def _value(model_field, obj):
        value = model_field.value_from_object(obj)
        if is_protected_type(value):
            return value
        return model_field.value_to_string(obj)

    def restore(self, document):
        """Replace the content of every backed up table with the document's rows"""
        if not isinstance(document, dict) or not isinstance(document.get('tables'), dict):
            raise RestoreError('Not a backup document')

        version = document.get('version')
        if version != BACKUP_FORMAT_VERSION:
            raise RestoreError(f"Unsupported backup version {version}, expected {BACKUP_FORMAT_VERSION}")

        tables = document['tables']
        known = {model._meta.label_lower for model in self.models}
        result = RestoreResult()

        for label in tables:
            if label not in known:
                result.warnings.append(f"Skipped unknown table {label}")

        with transaction.atomic():
            for model in reversed(self.models):
                model._default_manager.all().delete()

            for model in self.models:
                label = model._meta.label_lower
                objects = self._restore_rows(model, tables.get(label, []), result)
                model._default_manager.bulk_create(objects)
                result.inserted[label] = len(objects)

            self._reset_sequences()

        logger.info("Restored backup: %s", result.inserted)
        return result

    def _restore_rows(self, model, rows, result):
        definitions = field_definitions_for(model)
        label = model._meta.label_lower
        unknown = set()
        objects = []

        for row in rows:
            values = {}

            for column, value in row.items():
                definition = definitions.get(column)

                if definition is None:
                    unknown.add(column)
                    continue
                if definition.is_ignorable():
                    continue

                try:
                    values[column] = definition.to_python(value)
                except ValidationError as e:
                    raise RestoreError(f"Invalid value for {label}.{column}: {value!r}") from e

            objects.append(model(**values))

        for column in sorted(unknown):
            result.warnings.append(f"Skipped unknown column {label}.{column}")

        return objects

    def _reset_sequences(self):
        statements = connection.ops.sequence_reset_sql(no_style(), self.models)
        if statements:
            with connection.cursor() as cursor:
                for sql in statements:
                    cursor.execute(sql)
