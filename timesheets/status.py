from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from django.db.models import Sum
from ehour_backend.resources import get_message
from projects.models import ProjectAssignment
from .models import TimesheetEntry


class Status:
    IN_ALLOTTED = 'IN_ALLOTTED'
    OVER_ALLOTTED = 'OVER_ALLOTTED'
    IN_OVERRUN = 'IN_OVERRUN'
    OVER_OVERRUN = 'OVER_OVERRUN'

    INVALID = {OVER_ALLOTTED, OVER_OVERRUN}

    RESOURCE_KEYS = {
        OVER_ALLOTTED: 'timesheet.status.overAllotted',
        IN_OVERRUN: 'timesheet.status.inOverrun',
        OVER_OVERRUN: 'timesheet.status.overOverrun',
    }


@dataclass
class AssignmentStatus:
    assignment: ProjectAssignment
    booked_hours: Decimal = Decimal(0)
    statuses: List[str] = field(default_factory=list)

    @property
    def is_valid(self):
        return not any(status in Status.INVALID for status in self.statuses)

    @property
    def is_in_overrun(self):
        return Status.IN_OVERRUN in self.statuses

    @property
    def messages(self):
        return [get_message(Status.RESOURCE_KEYS[s]) for s in self.statuses if s in Status.RESOURCE_KEYS]


def get_booked_hours(assignment):
    total = TimesheetEntry.objects.filter(assignment=assignment).aggregate(total=Sum('hours'))['total']
    return total or Decimal(0)


def get_assignment_status(assignment):
    """Compare the hours booked on an assignment with its allotted budget"""
    booked = get_booked_hours(assignment)
    status = AssignmentStatus(assignment=assignment, booked_hours=booked)

    if assignment.assignment_type == ProjectAssignment.TYPE_FIXED:
        if booked > assignment.allotted_hours:
            status.statuses.append(Status.OVER_ALLOTTED)
        else:
            status.statuses.append(Status.IN_ALLOTTED)

    elif assignment.assignment_type == ProjectAssignment.TYPE_FLEX:
        overrun_limit = assignment.allotted_hours + assignment.allotted_hours_overrun

        if booked > overrun_limit:
            status.statuses.append(Status.OVER_OVERRUN)
        elif booked > assignment.allotted_hours:
            status.statuses.append(Status.IN_OVERRUN)
        else:
            status.statuses.append(Status.IN_ALLOTTED)

    return status
