# config/views.py
from django.http import JsonResponse

from core.exceptions import error_body


def route_not_found(request, exception=None):
    return JsonResponse(error_body('Route not found'), status=404)


def server_error(request):
    return JsonResponse(error_body('Internal server error'), status=500)
