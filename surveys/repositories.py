"""
surveys/repositories.py
Acceso a datos para los agregadores de analítica.

Convierte filas del ORM en registros planos (core.services.records) para que
los agregadores no dependan del almacenamiento.
"""
import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from django.conf import settings

from core.services.records import ResponseRecord, SurveySchema
from .models import Survey, SurveyResponse

logger = logging.getLogger('surveys')

ALL_LOCATIONS = 'all'


def chunked(seq: Sequence, size: int) -> Iterator[list]:
    """Particiona una secuencia en bloques de tamaño fijo (el último puede ser menor)."""
    if size < 1:
        raise ValueError("El tamaño de bloque debe ser positivo")
    items = list(seq)
    for start in range(0, len(items), size):
        yield items[start:start + size]


def _to_schema(survey: Survey) -> SurveySchema:
    return SurveySchema(
        id=survey.id,
        name=survey.name,
        questions=[q.as_schema() for q in survey.questions.all()],
    )


def _to_record(row: SurveyResponse) -> ResponseRecord:
    return ResponseRecord(
        id=row.id,
        survey_id=row.survey_id,
        sede=row.sede or None,
        answers=row.answers or {},
        rating=row.rating,
        created_at=row.created_at,
        started_at=row.started_at,
    )


def fetch_owner_surveys(owner_id) -> List[SurveySchema]:
    """Todas las encuestas de un propietario con su esquema de preguntas ordenado."""
    surveys = (
        Survey.objects.filter(owner_id=owner_id)
        .prefetch_related('questions')
        .order_by('-created_at')
    )
    return [_to_schema(s) for s in surveys]


def fetch_survey_schema(survey_id) -> Optional[SurveySchema]:
    survey = Survey.objects.filter(pk=survey_id).prefetch_related('questions').first()
    if survey is None:
        logger.warning("Esquema solicitado para encuesta inexistente: %s", survey_id)
        return None
    return _to_schema(survey)


def fetch_responses(survey_ids: Iterable, sede: Optional[str] = None) -> List[ResponseRecord]:
    """
    Respuestas de un conjunto de encuestas, opcionalmente filtradas por sede.

    El conjunto de IDs se consulta en bloques de RESPONSE_QUERY_CHUNK_SIZE y los
    resultados se concatenan. Cualquier error de base de datos se propaga.
    """
    ids = list(survey_ids)
    if not ids:
        return []

    chunk_size = getattr(settings, 'RESPONSE_QUERY_CHUNK_SIZE', 30)
    records: List[ResponseRecord] = []
    for chunk in chunked(ids, chunk_size):
        qs = SurveyResponse.objects.filter(survey_id__in=chunk)
        if sede and sede != ALL_LOCATIONS:
            qs = qs.filter(sede=sede)
        records.extend(_to_record(row) for row in qs.order_by('created_at', 'id'))

    logger.debug("Respuestas cargadas: %s (encuestas=%s, sede=%s)", len(records), len(ids), sede)
    return records
