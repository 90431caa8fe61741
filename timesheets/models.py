from datetime import timedelta

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from django.core.exceptions import ValidationError
from employees.models import Employee
from projects.models import ProjectAssignment


class TimesheetEntry(models.Model):
    assignment = models.ForeignKey(ProjectAssignment, on_delete=models.CASCADE, related_name='timesheet_entries')
    entry_date = models.DateField()
    hours = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(24)]
    )
    comment = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['entry_date']
        unique_together = ['assignment', 'entry_date']
        verbose_name_plural = 'timesheet entries'
        indexes = [
            models.Index(fields=['entry_date'], name='timesheets__entry_d_4e5c19_idx'),
            models.Index(fields=['assignment', 'entry_date'], name='timesheets__assignm_b2d7a0_idx'),
        ]

    def __str__(self):
        return f"{self.assignment} - {self.entry_date}: {self.hours}"

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class TimesheetComment(models.Model):
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='timesheet_comments')
    # first day of the commented week
    comment_date = models.DateField()
    comment = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-comment_date']
        unique_together = ['employee', 'comment_date']

    def __str__(self):
        return f"{self.employee.full_name} - {self.comment_date}"


class TimesheetLockQuerySet(models.QuerySet):

    def overlapping(self, date_start, date_end):
        return self.filter(date_start__lte=date_end, date_end__gte=date_start)

    def locked_days(self, date_start, date_end):
        """Every locked day within [date_start, date_end], sorted"""
        days = set()

        for lock in self.overlapping(date_start, date_end):
            day = max(lock.date_start, date_start)
            last = min(lock.date_end, date_end)

            while day <= last:
                days.add(day)
                day += timedelta(days=1)

        return sorted(days)


class TimesheetLock(models.Model):
    name = models.CharField(max_length=255, blank=True)
    date_start = models.DateField()
    date_end = models.DateField()

    objects = TimesheetLockQuerySet.as_manager()

    class Meta:
        ordering = ['-date_start']

    def __str__(self):
        return self.name or f"{self.date_start} - {self.date_end}"

    def clean(self):
        if self.date_start and self.date_end and self.date_end < self.date_start:
            raise ValidationError('Lock end date must not be before its start date.')

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)
