from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from rest_framework import generics
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from apps.blog.models import BlogPost
from apps.catalog.api.permissions import IsStaffOrReadOnly
from apps.catalog.models import Product
from apps.enquiries.models import Enquiry
from .models import ManufacturingContent
from .serializers import ManufacturingContentSerializer


class ManufacturingContentView(generics.RetrieveUpdateAPIView):
    """
    The manufacturing page content.

    get: public
    put/patch: staff only, multipart for media uploads
    """
    serializer_class = ManufacturingContentSerializer
    permission_classes = [IsStaffOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_object(self):
        return ManufacturingContent.load()


@staff_member_required
@require_http_methods(["GET"])
def dashboard_stats(request):
    """Counters for the back-office dashboard."""
    return JsonResponse({
        'status': 'ok',
        'products': Product.objects.count(),
        'active_products': Product.objects.filter(is_active=True).count(),
        'enquiries': Enquiry.objects.count(),
        'new_enquiries': Enquiry.objects.filter(status=Enquiry.STATUS_NEW).count(),
        'blog_posts': BlogPost.objects.count(),
    })
