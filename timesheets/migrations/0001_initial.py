import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('employees', '0001_initial'),
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TimesheetEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entry_date', models.DateField()),
                ('hours', models.DecimalField(
                    decimal_places=2, max_digits=5,
                    validators=[
                        django.core.validators.MinValueValidator(0),
                        django.core.validators.MaxValueValidator(24),
                    ],
                )),
                ('comment', models.TextField(blank=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assignment', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='timesheet_entries',
                    to='projects.projectassignment',
                )),
            ],
            options={
                'verbose_name_plural': 'timesheet entries',
                'ordering': ['entry_date'],
                'indexes': [
                    models.Index(fields=['entry_date'], name='timesheets__entry_d_4e5c19_idx'),
                    models.Index(fields=['assignment', 'entry_date'], name='timesheets__assignm_b2d7a0_idx'),
                ],
                'unique_together': {('assignment', 'entry_date')},
            },
        ),
        migrations.CreateModel(
            name='TimesheetComment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('comment_date', models.DateField()),
                ('comment', models.TextField(blank=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='timesheet_comments',
                    to='employees.employee',
                )),
            ],
            options={
                'ordering': ['-comment_date'],
                'unique_together': {('employee', 'comment_date')},
            },
        ),
        migrations.CreateModel(
            name='TimesheetLock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(blank=True, max_length=255)),
                ('date_start', models.DateField()),
                ('date_end', models.DateField()),
            ],
            options={
                'ordering': ['-date_start'],
            },
        ),
    ]
