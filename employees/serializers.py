from rest_framework import serializers
from django.contrib.auth.models import User
from .models import Employee, Department
from .roles import render_role


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ['id', 'name', 'code']


class EmployeeSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()
    role_display = serializers.SerializerMethodField()
    department_name = serializers.CharField(source='department.name', read_only=True, default=None)
    username = serializers.CharField(write_only=True)
    password = serializers.CharField(write_only=True, min_length=8)

    class Meta:
        model = Employee
        fields = [
            'id', 'employee_id', 'username', 'password', 'first_name', 'last_name',
            'email', 'department', 'department_name', 'role', 'role_display', 'is_active',
            'full_name', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'employee_id', 'created_at', 'updated_at', 'full_name']

    def get_role_display(self, obj):
        return render_role(obj.role)

    def validate_username(self, value):
        users = User.objects.filter(username=value)
        if self.instance is not None:
            users = users.exclude(pk=self.instance.user_id)
        if users.exists():
            raise serializers.ValidationError(f"Username '{value}' is already taken.")
        return value

    def create(self, validated_data):
        username = validated_data.pop('username')
        password = validated_data.pop('password')

        user = User.objects.create_user(
            username=username,
            email=validated_data.get('email', ''),
            password=password,
            first_name=validated_data['first_name'],
            last_name=validated_data['last_name']
        )

        return Employee.objects.create(user=user, **validated_data)

    def update(self, instance, validated_data):
        username = validated_data.pop('username', None)
        password = validated_data.pop('password', None)

        user = instance.user
        if username:
            user.username = username
        if password:
            user.set_password(password)
        user.first_name = validated_data.get('first_name', instance.first_name)
        user.last_name = validated_data.get('last_name', instance.last_name)
        user.email = validated_data.get('email', instance.email)
        user.is_active = validated_data.get('is_active', instance.is_active)
        user.save()

        return super().update(instance, validated_data)


class EmployeeListSerializer(serializers.ModelSerializer):
    """Simplified serializer for list views"""
    full_name = serializers.ReadOnlyField()
    role_display = serializers.SerializerMethodField()
    department_name = serializers.CharField(source='department.name', read_only=True, default=None)

    class Meta:
        model = Employee
        fields = [
            'id', 'employee_id', 'full_name', 'email', 'role', 'role_display',
            'department_name', 'is_active'
        ]

    def get_role_display(self, obj):
        return render_role(obj.role)
