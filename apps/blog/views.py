from rest_framework import filters, viewsets
from django_filters.rest_framework import DjangoFilterBackend

from apps.catalog.api.permissions import IsStaffOrReadOnly
from .models import BlogPost
from .serializers import BlogPostListSerializer, BlogPostSerializer


class BlogPostViewSet(viewsets.ModelViewSet):
    """
    API endpoint for blog posts.

    list: Published posts, newest first
    retrieve: One post by slug with its sections
    create/update/delete: staff only
    """
    lookup_field = 'slug'
    permission_classes = [IsStaffOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['category']
    search_fields = ['title', 'excerpt']

    def get_queryset(self):
        queryset = BlogPost.objects.all()
        if not (self.request.user and self.request.user.is_staff):
            queryset = queryset.filter(is_published=True)
        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return BlogPostListSerializer
        return BlogPostSerializer
