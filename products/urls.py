from django.urls import include, path

from core.routers import OptionalSlashRouter

from .views import ProductViewSet

router = OptionalSlashRouter()
router.register(r'products', ProductViewSet, basename='product')

urlpatterns = [
    path('', include(router.urls)),
]
