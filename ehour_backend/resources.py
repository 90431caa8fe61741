"""
Localised message resources.

Labels shown by the front end are addressed by resource key. A key without a
registered message renders as the key itself so missing translations stay
visible instead of breaking the response.
"""
from django.utils.translation import gettext_lazy as _

MESSAGES = {
    # user roles
    'userRole.ROLE_CONSULTANT': _('Consultant'),
    'userRole.ROLE_REPORT': _('Report'),
    'userRole.ROLE_PROJECTMANAGER': _('Project manager'),
    'userRole.ROLE_MANAGER': _('Manager'),
    'userRole.ROLE_ADMIN': _('Administrator'),

    # report tabs
    'report.title.customer': _('Customer report'),
    'report.title.project': _('Project report'),
    'report.title.employee': _('Employee report'),
    'report.title.detailed': _('Detailed report'),

    # timesheet form
    'timesheet.weekTitle': _('Week {0}: {1} - {2}'),
    'timesheet.weekSaved': _('{0} hours booked for {1} - {2}'),
    'timesheet.errorPersist': _('Not all hours could be saved, check the marked projects'),
    'timesheet.confirmReset': _('Are you sure you want to undo your changes?'),

    # assignment statuses
    'timesheet.status.overAllotted': _('Booked hours exceed the allotted hours'),
    'timesheet.status.overOverrun': _('Booked hours exceed the allotted hours including overrun'),
    'timesheet.status.inOverrun': _('Booked hours are in the overrun'),

    # lock administration
    'admin.lock.saved': _('Lock saved'),
    'admin.lock.deleted': _('Lock deleted'),
}


def get_message(key, *args):
    message = MESSAGES.get(key)

    if message is None:
        return key

    return str(message).format(*args)
