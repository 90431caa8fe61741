from rest_framework import serializers
from .models import Customer, Project, ProjectAssignment


class CustomerSerializer(serializers.ModelSerializer):
    project_count = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = ['id', 'name', 'code', 'description', 'is_active', 'project_count']

    def get_project_count(self, obj):
        return obj.projects.count()


class ProjectSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source='customer.name', read_only=True)
    project_manager_name = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'customer', 'customer_name', 'name', 'project_code', 'description',
            'contact', 'is_active', 'is_default', 'billable', 'project_manager',
            'project_manager_name'
        ]

    def get_project_manager_name(self, obj):
        return obj.project_manager.full_name if obj.project_manager else None


class ProjectListSerializer(serializers.ModelSerializer):
    """Simplified serializer for list views"""
    customer_name = serializers.CharField(source='customer.name', read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'name', 'project_code', 'customer_name', 'is_active', 'is_default', 'billable']


class ProjectAssignmentSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source='employee.full_name', read_only=True)
    project_name = serializers.CharField(source='project.name', read_only=True)
    customer_name = serializers.CharField(source='project.customer.name', read_only=True)

    class Meta:
        model = ProjectAssignment
        fields = [
            'id', 'employee', 'employee_name', 'project', 'project_name', 'customer_name',
            'date_start', 'date_end', 'hourly_rate', 'role', 'is_active', 'assignment_type',
            'allotted_hours', 'allotted_hours_overrun', 'notify_pm'
        ]

    def validate(self, data):
        date_start = data.get('date_start', getattr(self.instance, 'date_start', None))
        date_end = data.get('date_end', getattr(self.instance, 'date_end', None))
        if date_start and date_end and date_end < date_start:
            raise serializers.ValidationError({'date_end': 'End date must not be before the start date.'})

        assignment_type = data.get(
            'assignment_type', getattr(self.instance, 'assignment_type', ProjectAssignment.TYPE_DATE)
        )
        allotted = data.get('allotted_hours', getattr(self.instance, 'allotted_hours', None))
        overrun = data.get('allotted_hours_overrun', getattr(self.instance, 'allotted_hours_overrun', None))

        if assignment_type in (ProjectAssignment.TYPE_FIXED, ProjectAssignment.TYPE_FLEX) and allotted is None:
            raise serializers.ValidationError({'allotted_hours': 'Time allotted assignments need allotted hours.'})
        if assignment_type == ProjectAssignment.TYPE_FLEX and overrun is None:
            raise serializers.ValidationError(
                {'allotted_hours_overrun': 'Flexible assignments need allotted overrun hours.'}
            )

        return data
