import logging

from django.db import IntegrityError, transaction
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from .models import Enquiry
from .serializers import EnquiryCreateSerializer, EnquirySerializer
from .services import SheetSyncService, unique_enquiry_id

logger = logging.getLogger(__name__)

ID_ATTEMPTS = 3


class EnquiryViewSet(mixins.CreateModelMixin,
                     mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.UpdateModelMixin,
                     mixins.DestroyModelMixin,
                     viewsets.GenericViewSet):
    """
    API endpoint for enquiries.

    create: Public contact form (multipart), returns the enquiry id
    list/retrieve/update/delete: staff only; update changes the status
    sync: staff only; push to the spreadsheet and mark as read
    """
    queryset = Enquiry.objects.all()
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status', 'subject']

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        return [IsAdminUser()]

    def get_serializer_class(self):
        if self.action == 'create':
            return EnquiryCreateSerializer
        return EnquirySerializer

    def perform_create(self, serializer):
        for attempt in range(1, ID_ATTEMPTS + 1):
            enquiry_id = unique_enquiry_id()
            try:
                with transaction.atomic():
                    enquiry = serializer.save(enquiry_id=enquiry_id)
                break
            except IntegrityError:
                # Another request took the same id between the check and the insert
                logger.warning("Enquiry id %s already taken (attempt %d)", enquiry_id, attempt)
                if attempt == ID_ATTEMPTS:
                    raise
        logger.info("Enquiry %s received (%s)", enquiry.enquiry_id, enquiry.subject)
        SheetSyncService.push(enquiry, self.request)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return Response(
            {'enquiry_id': serializer.instance.enquiry_id, 'status': Enquiry.STATUS_NEW},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['post'])
    def sync(self, request, pk=None):
        enquiry = self.get_object()
        if not SheetSyncService.is_configured():
            return Response({'error': 'Sheet webhook is not configured'}, status=status.HTTP_400_BAD_REQUEST)
        synced = SheetSyncService.sync_and_mark_read(enquiry, request)
        if synced is None:
            return Response({'error': 'Sync failed'}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(EnquirySerializer(synced, context={'request': request}).data)
