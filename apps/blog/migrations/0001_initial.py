# Generated manually

from django.db import migrations, models
import imagekit.models.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BlogPost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255, verbose_name='Title')),
                ('slug', models.SlugField(blank=True, max_length=255, unique=True, verbose_name='Slug')),
                ('category', models.CharField(choices=[('Industry Trends', 'Industry Trends'), ('Technical Guide', 'Technical Guide'), ('Company News', 'Company News')], default='Technical Guide', max_length=50, verbose_name='Category')),
                ('excerpt', models.TextField(blank=True, verbose_name='Excerpt')),
                ('author', models.CharField(default='Durable Editorial', max_length=120, verbose_name='Author')),
                ('cover_image', imagekit.models.fields.ProcessedImageField(blank=True, null=True, upload_to='blog/%Y/%m/', verbose_name='Cover image')),
                ('content', models.TextField(blank=True, help_text='JSON list of text and table sections', verbose_name='Content')),
                ('is_published', models.BooleanField(default=True, verbose_name='Published')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
            ],
            options={
                'verbose_name': 'Blog post',
                'verbose_name_plural': 'Blog posts',
                'ordering': ['-created_at'],
            },
        ),
    ]
