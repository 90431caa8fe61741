import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('employees', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('code', models.CharField(max_length=32, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'ordering': ['name', 'code'],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('project_code', models.CharField(max_length=32, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('contact', models.CharField(blank=True, max_length=255)),
                ('is_active', models.BooleanField(default=True)),
                ('is_default', models.BooleanField(default=False)),
                ('billable', models.BooleanField(default=True)),
                ('customer', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='projects', to='projects.customer',
                )),
                ('project_manager', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='managed_projects', to='employees.employee',
                )),
            ],
            options={
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['is_active'], name='projects_pr_is_acti_3c1d0e_idx'),
                    models.Index(fields=['customer', 'is_active'], name='projects_pr_custome_8f2a41_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProjectAssignment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_start', models.DateField(blank=True, null=True)),
                ('date_end', models.DateField(blank=True, null=True)),
                ('hourly_rate', models.DecimalField(
                    blank=True, decimal_places=2, max_digits=10, null=True,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ('role', models.CharField(blank=True, max_length=255)),
                ('is_active', models.BooleanField(default=True)),
                ('assignment_type', models.CharField(
                    choices=[
                        ('date', 'Date range'),
                        ('fixed', 'Fixed allotted hours'),
                        ('flex', 'Flexible allotted hours'),
                    ],
                    default='date',
                    max_length=10,
                )),
                ('allotted_hours', models.DecimalField(
                    blank=True, decimal_places=2, max_digits=8, null=True,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ('allotted_hours_overrun', models.DecimalField(
                    blank=True, decimal_places=2, max_digits=8, null=True,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ('notify_pm', models.BooleanField(default=False)),
                ('employee', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='assignments', to='employees.employee',
                )),
                ('project', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='assignments', to='projects.project',
                )),
            ],
            options={
                'ordering': ['project__name', 'date_start'],
                'indexes': [
                    models.Index(fields=['employee', 'is_active'], name='projects_pr_employe_5b7e92_idx'),
                ],
            },
        ),
    ]
