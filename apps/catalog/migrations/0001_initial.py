# Generated manually

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import imagekit.models.fields
import simple_history.models


HISTORY_TYPE_CHOICES = [('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('slug', models.SlugField(blank=True, max_length=200, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('image', models.ImageField(blank=True, null=True, upload_to='categories/', verbose_name='Image')),
                ('variant_style', models.CharField(blank=True, choices=[('fastener', 'Fastener (diameter / length / finish / type)'), ('fitting', 'Fitting (size / finish)')], help_text='Leave empty to derive it from the category name', max_length=20, verbose_name='Variant style')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Display order')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='children', to='catalog.category', verbose_name='Parent category')),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Name')),
                ('slug', models.SlugField(blank=True, max_length=255, unique=True, verbose_name='Slug')),
                ('short_description', models.CharField(blank=True, max_length=500, verbose_name='Short description')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('material', models.CharField(blank=True, max_length=120, verbose_name='Material')),
                ('material_grade', models.CharField(blank=True, max_length=120, verbose_name='Material grade')),
                ('head_type', models.CharField(blank=True, max_length=120, verbose_name='Head type')),
                ('drive_type', models.CharField(blank=True, max_length=120, verbose_name='Drive type')),
                ('thread_type', models.CharField(blank=True, max_length=120, verbose_name='Thread type')),
                ('specifications', models.JSONField(blank=True, default=list, help_text='List of {"key": ..., "value": ...}', verbose_name='Specifications')),
                ('dimensional_specifications', models.JSONField(blank=True, default=list, help_text='List of {"label": ..., "symbol": ..., "values": {diameter: value}}', verbose_name='Dimensional specifications')),
                ('applications', models.JSONField(blank=True, default=list, help_text='List of {"name": ..., "image": ...}', verbose_name='Applications')),
                ('certifications', models.JSONField(blank=True, default=list, help_text='List of {"title": ..., "subtitle": ...}', verbose_name='Certifications')),
                ('faqs', models.JSONField(blank=True, default=list, help_text='List of {"question": ..., "answer": ...}', verbose_name='FAQs')),
                ('finish_images', models.JSONField(blank=True, default=dict, help_text='Map of finish name to image URL', verbose_name='Finish images')),
                ('type_images', models.JSONField(blank=True, default=dict, help_text='Map of type name to image URL', verbose_name='Type images')),
                ('size_images', models.JSONField(blank=True, default=list, help_text='List of {"labels": [...], "name": ..., "image": ...}', verbose_name='Size images')),
                ('technical_drawing', models.FileField(blank=True, null=True, upload_to='products/drawings/', verbose_name='Technical drawing')),
                ('position', models.PositiveIntegerField(db_index=True, default=0, verbose_name='Position')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('category', models.ForeignKey(blank=True, help_text='Either a top-level category or a sub-category', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='catalog.category', verbose_name='Category')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['position', 'name'],
            },
        ),
        migrations.CreateModel(
            name='ProductImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('image', imagekit.models.fields.ProcessedImageField(upload_to='products/%Y/%m/', verbose_name='Image')),
                ('alt_text', models.CharField(blank=True, max_length=255, verbose_name='Alt text')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Display order')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to='catalog.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Product image',
                'verbose_name_plural': 'Product images',
                'ordering': ['display_order', 'pk'],
            },
        ),
        migrations.CreateModel(
            name='ProductVariant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('diameter', models.CharField(blank=True, help_text='Diameter or gauge number; the size label for fittings', max_length=50, verbose_name='Diameter / size')),
                ('diameter_unit', models.CharField(choices=[('mm', 'mm'), ('gauge', 'Gauge')], default='mm', max_length=10, verbose_name='Diameter unit')),
                ('length', models.CharField(blank=True, help_text='Single length or comma separated lengths, e.g. "25, 32, 40"', max_length=255, verbose_name='Length')),
                ('unit', models.CharField(choices=[('mm', 'mm'), ('inch', 'inch')], default='mm', max_length=10, verbose_name='Length unit')),
                ('finish', models.CharField(blank=True, max_length=120, verbose_name='Finish')),
                ('type', models.CharField(blank=True, max_length=120, verbose_name='Type')),
                ('image', models.CharField(blank=True, help_text='Image shown for this exact combination', max_length=500, verbose_name='Image URL')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Display order')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='catalog.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Variant',
                'verbose_name_plural': 'Variants',
                'ordering': ['display_order', 'pk'],
            },
        ),
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Name')),
                ('slug', models.SlugField(blank=True, max_length=255, verbose_name='Slug')),
                ('short_description', models.CharField(blank=True, max_length=500, verbose_name='Short description')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('material', models.CharField(blank=True, max_length=120, verbose_name='Material')),
                ('material_grade', models.CharField(blank=True, max_length=120, verbose_name='Material grade')),
                ('head_type', models.CharField(blank=True, max_length=120, verbose_name='Head type')),
                ('drive_type', models.CharField(blank=True, max_length=120, verbose_name='Drive type')),
                ('thread_type', models.CharField(blank=True, max_length=120, verbose_name='Thread type')),
                ('specifications', models.JSONField(blank=True, default=list, help_text='List of {"key": ..., "value": ...}', verbose_name='Specifications')),
                ('dimensional_specifications', models.JSONField(blank=True, default=list, help_text='List of {"label": ..., "symbol": ..., "values": {diameter: value}}', verbose_name='Dimensional specifications')),
                ('applications', models.JSONField(blank=True, default=list, help_text='List of {"name": ..., "image": ...}', verbose_name='Applications')),
                ('certifications', models.JSONField(blank=True, default=list, help_text='List of {"title": ..., "subtitle": ...}', verbose_name='Certifications')),
                ('faqs', models.JSONField(blank=True, default=list, help_text='List of {"question": ..., "answer": ...}', verbose_name='FAQs')),
                ('finish_images', models.JSONField(blank=True, default=dict, help_text='Map of finish name to image URL', verbose_name='Finish images')),
                ('type_images', models.JSONField(blank=True, default=dict, help_text='Map of type name to image URL', verbose_name='Type images')),
                ('size_images', models.JSONField(blank=True, default=list, help_text='List of {"labels": [...], "name": ..., "image": ...}', verbose_name='Size images')),
                ('position', models.PositiveIntegerField(db_index=True, default=0, verbose_name='Position')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Updated at')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('category', models.ForeignKey(blank=True, db_constraint=False, help_text='Either a top-level category or a sub-category', null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='catalog.category', verbose_name='Category')),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical Product',
                'verbose_name_plural': 'historical Products',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='HistoricalProductVariant',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('diameter', models.CharField(blank=True, help_text='Diameter or gauge number; the size label for fittings', max_length=50, verbose_name='Diameter / size')),
                ('diameter_unit', models.CharField(choices=[('mm', 'mm'), ('gauge', 'Gauge')], default='mm', max_length=10, verbose_name='Diameter unit')),
                ('length', models.CharField(blank=True, help_text='Single length or comma separated lengths, e.g. "25, 32, 40"', max_length=255, verbose_name='Length')),
                ('unit', models.CharField(choices=[('mm', 'mm'), ('inch', 'inch')], default='mm', max_length=10, verbose_name='Length unit')),
                ('finish', models.CharField(blank=True, max_length=120, verbose_name='Finish')),
                ('type', models.CharField(blank=True, max_length=120, verbose_name='Type')),
                ('image', models.CharField(blank=True, help_text='Image shown for this exact combination', max_length=500, verbose_name='Image URL')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Display order')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('product', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='catalog.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'historical Variant',
                'verbose_name_plural': 'historical Variants',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
