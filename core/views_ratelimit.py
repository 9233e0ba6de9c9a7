"""
Rate limiting error handler for core app.
"""

from django.http import JsonResponse


def ratelimit_error(request, exception=None):
    """Respuesta JSON para errores de rate limiting."""
    return JsonResponse(
        {'error': 'Has excedido el límite de solicitudes permitidas. Por favor, inténtalo más tarde.'},
        status=429,
    )
