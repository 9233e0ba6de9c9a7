# feedbackqr/views.py

from django.http import JsonResponse


def custom_404(request, exception=None):
    """Error 404 en formato JSON (Recurso no encontrado)"""
    return JsonResponse({'error': 'Recurso no encontrado.'}, status=404)


def custom_500(request):
    """Error 500 en formato JSON (Error del servidor)"""
    return JsonResponse({'error': 'Error interno del servidor.'}, status=500)
