from django.db import models
from django.contrib.auth.models import User


class Department(models.Model):
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.code} - {self.name}"


class Employee(models.Model):
    ROLE_CONSULTANT = 'ROLE_CONSULTANT'
    ROLE_REPORT = 'ROLE_REPORT'
    ROLE_PROJECTMANAGER = 'ROLE_PROJECTMANAGER'
    ROLE_MANAGER = 'ROLE_MANAGER'
    ROLE_ADMIN = 'ROLE_ADMIN'

    ROLE_CHOICES = [
        (ROLE_CONSULTANT, 'Consultant'),
        (ROLE_REPORT, 'Report'),
        (ROLE_PROJECTMANAGER, 'Project manager'),
        (ROLE_MANAGER, 'Manager'),
        (ROLE_ADMIN, 'Administrator'),
    ]

    # Auto-generated employee ID
    employee_id = models.CharField(max_length=20, unique=True, blank=True)
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='employee')
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    email = models.EmailField(blank=True)
    department = models.ForeignKey(
        Department, on_delete=models.SET_NULL, blank=True, null=True, related_name='employees'
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CONSULTANT)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['last_name', 'first_name']

    def save(self, *args, **kwargs):
        if not self.employee_id:
            self.employee_id = self.generate_employee_id()
        super().save(*args, **kwargs)

    def generate_employee_id(self):
        """Generate employee ID in format: EMP001, EMP002, etc."""
        last_employee = Employee.objects.filter(
            employee_id__startswith='EMP'
        ).order_by('employee_id').last()

        if last_employee:
            try:
                new_number = int(last_employee.employee_id[3:]) + 1
            except (ValueError, IndexError):
                new_number = 1
        else:
            new_number = 1

        return f"EMP{new_number:03d}"

    def __str__(self):
        return f"{self.employee_id} - {self.first_name} {self.last_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name_last_first(self):
        return f"{self.last_name}, {self.first_name}"
