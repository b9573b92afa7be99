from django.urls import include, path

from core.routers import OptionalSlashRouter

from .views import ContactViewSet

router = OptionalSlashRouter()
router.register(r'contact', ContactViewSet, basename='contact')

urlpatterns = [
    path('', include(router.urls)),
]
