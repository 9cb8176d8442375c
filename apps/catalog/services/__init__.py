from .variant_navigation import VariantNavigationService
from .variant_editor import VariantEditorService, VariantPayloadError
from .ordering import ProductOrderingService, ReorderError

__all__ = [
    'VariantNavigationService',
    'VariantEditorService',
    'VariantPayloadError',
    'ProductOrderingService',
    'ReorderError',
]
