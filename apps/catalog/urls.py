from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    # Products
    path('products/reorder/', views.products_reorder, name='products_reorder'),
    path('products/<int:product_id>/', views.product_delete, name='product_delete'),

    # Variants
    path('products/<int:product_id>/variants/', views.product_variants_data, name='product_variants_data'),
    path('products/<int:product_id>/variants/save/', views.product_variants_save, name='product_variants_save'),

    # Images
    path('products/<int:product_id>/images/', views.product_images_list, name='product_images_list'),
    path('products/<int:product_id>/images/upload/', views.product_image_upload, name='product_image_upload'),
    path('images/<int:image_id>/delete/', views.product_image_delete, name='product_image_delete'),
    path('uploads/<slug:folder>/', views.editor_image_upload, name='editor_image_upload'),
]
