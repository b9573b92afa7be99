from django.urls import include, path

from core.routers import OptionalSlashRouter

from .views import DepartmentViewSet, DesignationViewSet

router = OptionalSlashRouter()
router.register(r'departments', DepartmentViewSet, basename='department')
router.register(r'designations', DesignationViewSet, basename='designation')

urlpatterns = [
    path('', include(router.urls)),
]
