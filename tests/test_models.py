"""
Tests de modelos: encuestas, preguntas, respuestas y perfil de usuario.
"""
import pytest
from django.core.exceptions import ValidationError

from core.models import UserProfile
from surveys.models import Question, Survey, SurveyResponse


@pytest.fixture
def survey(user):
    return Survey.objects.create(owner=user, name='Local Norte', sede='Norte')


@pytest.mark.django_db
class TestSurvey:

    def test_public_id_generated(self, survey):
        assert survey.public_id
        assert len(survey.public_id) <= 12

    def test_public_id_is_stable(self, survey):
        public_id = survey.public_id
        survey.name = 'Renombrada'
        survey.save()
        survey.refresh_from_db()
        assert survey.public_id == public_id

    def test_defaults(self, user):
        survey = Survey.objects.create(owner=user, name='Sin sede')
        assert survey.sede == 'General'
        assert survey.status == Survey.STATUS_PUBLISHED


@pytest.mark.django_db
class TestQuestion:

    def test_multiple_choice_requires_options(self, survey):
        question = Question(survey=survey, key='q1', type=Question.TYPE_MULTIPLE_CHOICE, title='Elige')
        with pytest.raises(ValidationError):
            question.clean()

    def test_as_schema(self, survey):
        question = Question.objects.create(
            survey=survey, key='servicio', type=Question.TYPE_MULTIPLE_CHOICE,
            title='¿Cómo fue el servicio?', options=['Rápido', 'Lento'],
        )
        schema = question.as_schema()
        assert schema.id == 'servicio'
        assert schema.options == ['Rápido', 'Lento']


class TestComputeRating:

    def _questions(self):
        return [
            Question(key='estrellas', type=Question.TYPE_RATING, title='Estrellas'),
            Question(key='nps_q', type=Question.TYPE_NPS, title='NPS'),
            Question(key='comment', type=Question.TYPE_TEXT, title='Comentario'),
        ]

    def test_averages_rating_and_rescaled_nps(self):
        rating = SurveyResponse.compute_rating(self._questions(), {'estrellas': 4, 'nps_q': 10, 'comment': 'ok'})
        assert rating == pytest.approx(4.5)

    def test_no_scorable_answers(self):
        assert SurveyResponse.compute_rating(self._questions(), {'comment': 'solo texto'}) == 0

    def test_ignores_non_numeric(self):
        assert SurveyResponse.compute_rating(self._questions(), {'estrellas': 'cinco', 'nps_q': True}) == 0

    def test_ignores_non_finite(self):
        rating = SurveyResponse.compute_rating(self._questions(), {'estrellas': float('nan'), 'nps_q': 8})
        assert rating == 4


@pytest.mark.django_db
def test_from_submission_stores_sede_and_rating(survey):
    Question.objects.create(survey=survey, key='estrellas', type=Question.TYPE_RATING, title='Estrellas')

    response = SurveyResponse.from_submission(survey, {'estrellas': 3})

    assert response.sede == 'Norte'
    assert response.rating == 3
    assert response.started_at is not None


@pytest.mark.django_db
def test_profile_created_with_free_plan(user):
    profile = UserProfile.objects.get(user=user)
    assert profile.plan == UserProfile.PLAN_FREE
    assert not profile.is_pro
