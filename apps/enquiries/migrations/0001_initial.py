# Generated manually

from django.db import migrations, models
import apps.enquiries.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Enquiry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('enquiry_id', models.CharField(editable=False, max_length=20, unique=True, verbose_name='Enquiry ID')),
                ('first_name', models.CharField(max_length=120, verbose_name='First name')),
                ('last_name', models.CharField(blank=True, max_length=120, verbose_name='Last name')),
                ('email', models.EmailField(max_length=254, verbose_name='Email')),
                ('phone', models.CharField(blank=True, max_length=40, verbose_name='Phone')),
                ('subject', models.CharField(choices=[('Export Inquiry', 'Export Inquiry'), ('Custom Fastener / OEM Requirement', 'Custom Fastener / OEM Requirement'), ('Product Inquiry - Standard Items', 'Product Inquiry - Standard Items'), ('Bulk Purchase / Dealership Inquiry', 'Bulk Purchase / Dealership Inquiry'), ('Existing Order / Customer Support', 'Existing Order / Customer Support'), ('Direct Complaint / Feedback to Management', 'Direct Complaint / Feedback to Management'), ('Vendor / Raw Material / Service Proposal', 'Vendor / Raw Material / Service Proposal'), ('Career / Job Application', 'Career / Job Application'), ('Marketing / Business Collaboration', 'Marketing / Business Collaboration'), ('General Inquiry', 'General Inquiry')], default='General Inquiry', max_length=100, verbose_name='Subject')),
                ('message', models.TextField(verbose_name='Message')),
                ('document', models.FileField(blank=True, null=True, upload_to=apps.enquiries.models.document_upload_to, verbose_name='Document')),
                ('image', models.ImageField(blank=True, null=True, upload_to=apps.enquiries.models.image_upload_to, verbose_name='Image')),
                ('status', models.CharField(choices=[('new', 'New'), ('read', 'Read'), ('contacted', 'Contacted')], db_index=True, default='new', max_length=20, verbose_name='Status')),
                ('synced_at', models.DateTimeField(blank=True, null=True, verbose_name='Synced to sheet at')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Received at')),
            ],
            options={
                'verbose_name': 'Enquiry',
                'verbose_name_plural': 'Enquiries',
                'ordering': ['-created_at'],
            },
        ),
    ]
