from django.urls import path

from .views import ManufacturingContentView

urlpatterns = [
    path('manufacturing/', ManufacturingContentView.as_view(), name='manufacturing-content'),
]
