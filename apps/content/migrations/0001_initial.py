# Generated manually

from django.db import migrations, models
import apps.content.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ManufacturingContent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('hero_title', models.CharField(blank=True, max_length=255, verbose_name='Hero title')),
                ('hero_subtitle', models.TextField(blank=True, verbose_name='Hero subtitle')),
                ('overview_title', models.CharField(blank=True, max_length=255, verbose_name='Overview title')),
                ('overview_description', models.TextField(blank=True, verbose_name='Overview description')),
                ('media1_title', models.CharField(blank=True, max_length=255, verbose_name='Block 1 title')),
                ('media1_subtitle', models.CharField(blank=True, max_length=255, verbose_name='Block 1 subtitle')),
                ('media1_file', models.FileField(blank=True, null=True, upload_to='manufacturing/', validators=[apps.content.models.validate_image_or_video], verbose_name='Block 1 image or video')),
                ('media2_title', models.CharField(blank=True, max_length=255, verbose_name='Block 2 title')),
                ('media2_subtitle', models.CharField(blank=True, max_length=255, verbose_name='Block 2 subtitle')),
                ('media2_file', models.FileField(blank=True, null=True, upload_to='manufacturing/', validators=[apps.content.models.validate_image_or_video], verbose_name='Block 2 image or video')),
                ('media3_title', models.CharField(blank=True, max_length=255, verbose_name='Block 3 title')),
                ('media3_subtitle', models.CharField(blank=True, max_length=255, verbose_name='Block 3 subtitle')),
                ('media3_file', models.FileField(blank=True, null=True, upload_to='manufacturing/', validators=[apps.content.models.validate_image_or_video], verbose_name='Block 3 image or video')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
            ],
            options={
                'verbose_name': 'Manufacturing page',
                'verbose_name_plural': 'Manufacturing page',
            },
        ),
    ]
