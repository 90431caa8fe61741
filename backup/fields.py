"""
Classification of model fields for restoring a backup.

Restore walks the columns of every backed up row and asks the field
definition of that column whether it should be restored. Ignorable fields
are skipped: the database or the model fills them in.
"""

# Per model label, field names which are never restored
IGNORABLE_FIELDS = {
    'auth.user': {'last_login'},
}


class FieldDefinition:

    def __init__(self, field):
        self.field = field

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"

    @property
    def name(self):
        return self.field.attname

    def is_ignorable(self):
        return False

    def to_python(self, value):
        if value is None:
            return None
        return self.field.to_python(value)


class IgnorableFieldDefinition(FieldDefinition):

    def is_ignorable(self):
        return True


def _is_auto_timestamp(field):
    return getattr(field, 'auto_now', False) or getattr(field, 'auto_now_add', False)


def field_definitions_for(model):
    """Definitions of every concrete field of a model, keyed by column attribute name"""
    ignored = IGNORABLE_FIELDS.get(model._meta.label_lower, set())
    definitions = {}

    for field in model._meta.concrete_fields:
        if _is_auto_timestamp(field) or field.name in ignored:
            definitions[field.attname] = IgnorableFieldDefinition(field)
        else:
            definitions[field.attname] = FieldDefinition(field)

    return definitions
