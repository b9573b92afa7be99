import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('departments', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='IdCard',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_active', models.BooleanField(default=True)),
                ('id_card_number', models.CharField(editable=False, max_length=20, unique=True)),
                ('employee_type', models.CharField(choices=[('full-time', 'Full time'), ('part-time', 'Part time'), ('contract', 'Contract'), ('intern', 'Intern'), ('temporary', 'Temporary')], max_length=20)),
                ('full_name', models.CharField(max_length=50)),
                ('employee_picture', models.CharField(max_length=255)),
                ('street', models.CharField(max_length=255)),
                ('city', models.CharField(max_length=100)),
                ('state', models.CharField(max_length=100)),
                ('zip_code', models.CharField(max_length=20)),
                ('country', models.CharField(default='India', max_length=100)),
                ('blood_group', models.CharField(choices=[('A+', 'A+'), ('A-', 'A-'), ('B+', 'B+'), ('B-', 'B-'), ('AB+', 'AB+'), ('AB-', 'AB-'), ('O+', 'O+'), ('O-', 'O-')], max_length=3)),
                ('mobile_number', models.CharField(max_length=20)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('date_of_birth', models.DateField()),
                ('date_of_joining', models.DateField()),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('department', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='id_cards', to='departments.department')),
                ('designation', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='id_cards', to='departments.designation')),
            ],
            options={
                'verbose_name': 'ID card',
                'verbose_name_plural': 'ID cards',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['employee_type', 'is_active'], name='idcard_type_active_idx'),
                    models.Index(fields=['department', 'is_active'], name='idcard_dept_active_idx'),
                    models.Index(fields=['designation', 'is_active'], name='idcard_desig_active_idx'),
                ],
            },
        ),
    ]
