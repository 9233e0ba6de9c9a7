# conftest.py
"""
Pytest configuration for FeedbackQR project.
Forces the use of test settings regardless of environment variables.
"""
import os
from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from core.services.records import QuestionSchema, ResponseRecord, SurveySchema

# Force test settings module before Django setup
os.environ['DJANGO_SETTINGS_MODULE'] = 'feedbackqr.settings.test'
os.environ['DJANGO_ENV'] = 'test'

# Lunes 19/10/2026 12:00 UTC
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def survey_schema():
    """Esquema con una pregunta de cada tipo."""
    return SurveySchema(
        id=1,
        name='Satisfacción Local Centro',
        questions=[
            QuestionSchema(id='nps_q', type='nps', title='¿Nos recomendarías?'),
            QuestionSchema(id='servicio', type='multiple_choice', title='¿Cómo fue el servicio?',
                           options=['Rápido', 'Lento']),
            QuestionSchema(id='estrellas', type='rating', title='Califica tu visita'),
            QuestionSchema(id='acuerdo', type='likert', title='El local estaba limpio'),
            QuestionSchema(id='comment', type='text', title='Comentarios'),
        ],
    )


@pytest.fixture
def make_response(now):
    """Fábrica de ResponseRecord; `hours_ago` se mide desde FIXED_NOW."""
    def _make(rating=0, hours_ago=1, sede=None, answers=None, survey_id=1, started_minutes_before=None):
        created_at = now - timedelta(hours=hours_ago)
        started_at = None
        if started_minutes_before is not None:
            started_at = created_at - timedelta(minutes=started_minutes_before)
        return ResponseRecord(
            survey_id=survey_id,
            answers=answers or {},
            rating=rating,
            created_at=created_at,
            started_at=started_at,
            sede=sede,
        )
    return _make


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='owner', password='12345')


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='intruso', password='12345')
