"""
core/views.py
Endpoints JSON que alimentan el dashboard de analítica y la página de resultados.
"""
from asgiref.sync import async_to_sync
from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET
from django_ratelimit.decorators import ratelimit

from surveys.models import Survey
from core.models import UserProfile
from core.services.analytics import get_analytics_dashboard
from core.services.placeholders import apply_placeholders
from core.services.results import get_survey_results
from core.utils.logging_utils import StructuredLogger

logger = StructuredLogger('core.views')

LOAD_ERROR_MESSAGE = 'No se pudieron cargar los datos.'


def _is_pro(user) -> bool:
    profile = UserProfile.objects.filter(user=user).first()
    return bool(profile and profile.is_pro)


@login_required
@require_GET
@ratelimit(key='user', rate=settings.ANALYTICS_RATELIMIT, block=True)
def analytics_dashboard_view(request: HttpRequest) -> JsonResponse:
    """Dashboard global del usuario; ?sede=<nombre|all> filtra por sede."""
    sede = request.GET.get('sede') or None
    try:
        report = async_to_sync(get_analytics_dashboard)(request.user.id, sede)
    except Exception:
        logger.exception("Fallo al cargar analítica", user_id=request.user.id, sede=sede)
        return JsonResponse({'error': LOAD_ERROR_MESSAGE}, status=500)

    payload = apply_placeholders(report.to_dict())
    payload['isPro'] = _is_pro(request.user)
    return JsonResponse(payload)


@login_required
@require_GET
@ratelimit(key='user', rate=settings.ANALYTICS_RATELIMIT, block=True)
def survey_results_view(request: HttpRequest, survey_id: int) -> JsonResponse:
    """Resultados por pregunta de una encuesta del usuario."""
    if not Survey.objects.filter(pk=survey_id, owner=request.user).exists():
        logger.warning(
            "Intento de acceso a resultados de encuesta ajena o inexistente",
            survey_id=survey_id, user_id=request.user.id, ip=request.META.get('REMOTE_ADDR'),
        )
        return JsonResponse({'error': 'La encuesta no existe o ha sido eliminada.'}, status=404)

    try:
        report = async_to_sync(get_survey_results)(survey_id)
    except Exception:
        logger.exception("Fallo al cargar resultados", user_id=request.user.id, survey_id=survey_id)
        return JsonResponse({'error': LOAD_ERROR_MESSAGE}, status=500)

    return JsonResponse(report.to_dict())
