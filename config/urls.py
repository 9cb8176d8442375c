from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),

    # Storefront API
    path('api/', include('apps.catalog.api.urls')),
    path('api/blog/', include('apps.blog.urls')),
    path('api/enquiries/', include('apps.enquiries.urls')),
    path('api/content/', include('apps.content.urls')),

    # Staff JSON endpoints
    path('catalog/', include('apps.catalog.urls')),
    path('back-office/', include('apps.content.staff_urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
