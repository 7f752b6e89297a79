from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='TravelGroup',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('destination', models.CharField(blank=True, max_length=100)),
                ('join_code', models.CharField(blank=True, max_length=10, null=True, unique=True)),
                ('departure_date', models.DateField()),
                ('return_date', models.DateField()),
                ('departure_airport', models.CharField(max_length=255)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Travel group',
                'ordering': ['-departure_date', 'name'],
            },
        ),
        migrations.CreateModel(
            name='GroupSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_gps_active', models.BooleanField(default=True)),
                ('tracking_interval', models.PositiveIntegerField(default=30)),
                ('radius_limit', models.PositiveIntegerField(default=500)),
                ('is_app_active', models.BooleanField(default=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('group', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='settings', to='travel_groups.travelgroup')),
            ],
            options={
                'verbose_name': 'Group settings',
                'verbose_name_plural': 'Group settings',
            },
        ),
    ]
