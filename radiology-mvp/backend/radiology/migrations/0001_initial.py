import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mrn', models.CharField(max_length=6, unique=True)),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('dob', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'patients',
            },
        ),
        migrations.CreateModel(
            name='RadiologyOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('urgency', models.CharField(
                    choices=[('routine', 'Routine'), ('stat', 'STAT'), ('on_scheduled_date', 'On scheduled date')],
                    default='routine',
                    max_length=20,
                )),
                ('scheduled_date', models.DateTimeField(blank=True, null=True)),
                ('instructions', models.TextField(blank=True, default='')),
                ('voided', models.BooleanField(default=False)),
                ('void_reason', models.CharField(blank=True, default='', max_length=255)),
                ('date_voided', models.DateTimeField(blank=True, null=True)),
                ('discontinued', models.BooleanField(default=False)),
                ('discontinued_reason', models.CharField(blank=True, default='', max_length=255)),
                ('date_discontinued', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('orderer', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='radiology_orders',
                    to=settings.AUTH_USER_MODEL,
                )),
                ('patient', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='radiology_orders',
                    to='radiology.patient',
                )),
            ],
            options={
                'db_table': 'radiology_orders',
                'permissions': [
                    ('place_radiology_order', 'Can place radiology orders as referring physician'),
                    ('schedule_radiology_study', 'Can schedule radiology studies'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Study',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('study_instance_uid', models.CharField(blank=True, default='', max_length=64)),
                ('modality', models.CharField(
                    choices=[
                        ('CR', 'Computed Radiography'),
                        ('CT', 'Computed Tomography'),
                        ('MR', 'Magnetic Resonance'),
                        ('US', 'Ultrasound'),
                        ('NM', 'Nuclear Medicine'),
                        ('PET', 'Positron Emission Tomography'),
                        ('XA', 'X-Ray Angiography'),
                        ('MG', 'Mammography'),
                        ('DX', 'Digital Radiography'),
                    ],
                    default='CR',
                    max_length=4,
                )),
                ('scheduled_status', models.CharField(
                    blank=True,
                    choices=[('scheduled', 'Scheduled'), ('arrived', 'Arrived'), ('ready', 'Ready'), ('started', 'Started')],
                    max_length=20,
                    null=True,
                )),
                ('performed_status', models.CharField(
                    blank=True,
                    choices=[('in_progress', 'In progress'), ('discontinued', 'Discontinued'), ('completed', 'Completed')],
                    max_length=20,
                    null=True,
                )),
                ('mwl_status', models.CharField(
                    choices=[
                        ('default', 'Default'),
                        ('save_ok', 'Save OK'),
                        ('save_err', 'Save error'),
                        ('update_ok', 'Update OK'),
                        ('update_err', 'Update error'),
                        ('void_ok', 'Void OK'),
                        ('void_err', 'Void error'),
                        ('unvoid_ok', 'Unvoid OK'),
                        ('unvoid_err', 'Unvoid error'),
                        ('discontinue_ok', 'Discontinue OK'),
                        ('discontinue_err', 'Discontinue error'),
                        ('undiscontinue_ok', 'Undiscontinue OK'),
                        ('undiscontinue_err', 'Undiscontinue error'),
                    ],
                    default='default',
                    max_length=20,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('order', models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='study',
                    to='radiology.radiologyorder',
                )),
            ],
            options={
                'db_table': 'studies',
                'verbose_name_plural': 'studies',
            },
        ),
    ]
