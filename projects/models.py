from django.db import models
from django.core.validators import MinValueValidator
from django.core.exceptions import ValidationError
from employees.models import Employee


class Customer(models.Model):
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=32, unique=True)
    description = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['name', 'code']

    def __str__(self):
        return f"{self.code} - {self.name}"

    @property
    def sort_key(self):
        return (self.name.lower(), self.code.lower())


class ProjectQuerySet(models.QuerySet):
    """Project lookups used throughout the application"""

    def find_all(self):
        return self.select_related('customer', 'project_manager').all()

    def find_all_active(self):
        return self.find_all().filter(is_active=True)

    def find_default_projects(self):
        """Active projects every employee can book on"""
        return self.find_all_active().filter(is_default=True)

    def find_projects_for_customers(self, customers, only_active):
        projects = self.find_all().filter(customer__in=customers)

        if only_active:
            projects = projects.filter(is_active=True)

        return projects

    def find_active_projects_where_user_is_pm(self, employee):
        return self.find_all_active().filter(project_manager=employee)

    def find_all_projects_with_pm_set(self):
        return self.find_all().filter(project_manager__isnull=False)


class Project(models.Model):
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='projects')
    name = models.CharField(max_length=255)
    project_code = models.CharField(max_length=32, unique=True)
    description = models.TextField(blank=True, null=True)
    contact = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    is_default = models.BooleanField(default=False)
    billable = models.BooleanField(default=True)
    project_manager = models.ForeignKey(
        Employee, on_delete=models.SET_NULL, blank=True, null=True, related_name='managed_projects'
    )

    objects = ProjectQuerySet.as_manager()

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active'], name='projects_pr_is_acti_3c1d0e_idx'),
            models.Index(fields=['customer', 'is_active'], name='projects_pr_custome_8f2a41_idx'),
        ]

    def __str__(self):
        return f"{self.project_code} - {self.name}"


class ProjectAssignmentQuerySet(models.QuerySet):

    def valid_for(self, employee, date_start, date_end):
        """Active assignments of an employee overlapping [date_start, date_end]"""
        return self.select_related('project', 'project__customer').filter(
            employee=employee,
            is_active=True,
            project__is_active=True,
            project__customer__is_active=True,
        ).filter(
            models.Q(date_start__isnull=True) | models.Q(date_start__lte=date_end),
            models.Q(date_end__isnull=True) | models.Q(date_end__gte=date_start),
        )


class ProjectAssignment(models.Model):
    TYPE_DATE = 'date'
    TYPE_FIXED = 'fixed'
    TYPE_FLEX = 'flex'

    TYPE_CHOICES = [
        (TYPE_DATE, 'Date range'),
        (TYPE_FIXED, 'Fixed allotted hours'),
        (TYPE_FLEX, 'Flexible allotted hours'),
    ]

    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='assignments')
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='assignments')
    date_start = models.DateField(blank=True, null=True)
    date_end = models.DateField(blank=True, null=True)
    hourly_rate = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True,
        validators=[MinValueValidator(0)]
    )
    role = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    assignment_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=TYPE_DATE)
    allotted_hours = models.DecimalField(
        max_digits=8, decimal_places=2, blank=True, null=True,
        validators=[MinValueValidator(0)]
    )
    allotted_hours_overrun = models.DecimalField(
        max_digits=8, decimal_places=2, blank=True, null=True,
        validators=[MinValueValidator(0)]
    )
    notify_pm = models.BooleanField(default=False)

    objects = ProjectAssignmentQuerySet.as_manager()

    class Meta:
        ordering = ['project__name', 'date_start']
        indexes = [
            models.Index(fields=['employee', 'is_active'], name='projects_pr_employe_5b7e92_idx'),
        ]

    def __str__(self):
        return f"{self.employee.full_name} - {self.project.name}"

    def clean(self):
        if self.date_start and self.date_end and self.date_end < self.date_start:
            raise ValidationError('Assignment end date must not be before its start date.')

        if self.assignment_type in (self.TYPE_FIXED, self.TYPE_FLEX) and self.allotted_hours is None:
            raise ValidationError('Time allotted assignments need allotted hours.')

        if self.assignment_type == self.TYPE_FLEX and self.allotted_hours_overrun is None:
            raise ValidationError('Flexible assignments need allotted overrun hours.')

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def is_date_within_range(self, day):
        """Open bounds count as unbounded"""
        if self.date_start and day < self.date_start:
            return False
        if self.date_end and day > self.date_end:
            return False
        return True

    @property
    def is_time_allotted(self):
        return self.assignment_type in (self.TYPE_FIXED, self.TYPE_FLEX)
