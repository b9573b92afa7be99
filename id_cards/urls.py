from django.urls import include, path

from core.routers import OptionalSlashRouter

from .views import IdCardViewSet

router = OptionalSlashRouter()
router.register(r'id-cards', IdCardViewSet, basename='id-card')

urlpatterns = [
    path('', include(router.urls)),
]
