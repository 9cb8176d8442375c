from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import EnquiryViewSet

router = SimpleRouter()
router.register(r'', EnquiryViewSet, basename='enquiry')

urlpatterns = [
    path('', include(router.urls)),
]
