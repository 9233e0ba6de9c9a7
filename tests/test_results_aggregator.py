"""
Tests para core/services/results.py
Desglose por pregunta de una encuesta.
"""
import json

import pytest

from core.services.records import LIKERT_SCALE, QuestionSchema, SurveySchema
from core.services.results import (
    TEXT_SAMPLE_SIZE,
    ResultsReport,
    aggregate_survey_results,
)


def _result(report, question_id):
    return next(q for q in report.question_results if q.question_id == question_id)


# ============================================================================
# OPCIÓN MÚLTIPLE Y LIKERT
# ============================================================================

class TestChoiceQuestions:

    def test_even_split(self, make_response):
        schema = SurveySchema(id=1, name='Encuesta', questions=[
            QuestionSchema(id='q1', type='multiple_choice', title='Elige', options=['A', 'B']),
        ])
        responses = [make_response(answers={'q1': answer}) for answer in ('A', 'A', 'B', 'B')]
        report = aggregate_survey_results(schema, responses)

        result = _result(report, 'q1')
        assert result.total == 4
        assert result.data == [
            {'name': 'A', 'value': 2, 'percentage': 50},
            {'name': 'B', 'value': 2, 'percentage': 50},
        ]

    def test_unanswered_question_keeps_shape(self, survey_schema, make_response):
        report = aggregate_survey_results(survey_schema, [make_response(answers={})])

        result = _result(report, 'servicio')
        assert result.total == 0
        assert [row['name'] for row in result.data] == ['Rápido', 'Lento']
        assert all(row['value'] == 0 and row['percentage'] == 0 for row in result.data)

    def test_answers_outside_options_are_ignored(self, survey_schema, make_response):
        responses = [
            make_response(answers={'servicio': 'Rápido'}),
            make_response(answers={'servicio': 'Regular'}),
        ]
        result = _result(aggregate_survey_results(survey_schema, responses), 'servicio')

        assert result.total == 1
        assert result.data[0]['percentage'] == 100

    def test_likert_uses_fixed_scale(self, survey_schema, make_response):
        responses = [
            make_response(answers={'acuerdo': 'De acuerdo'}),
            make_response(answers={'acuerdo': 'De acuerdo'}),
            make_response(answers={'acuerdo': 'Neutral'}),
        ]
        result = _result(aggregate_survey_results(survey_schema, responses), 'acuerdo')

        assert [row['name'] for row in result.data] == LIKERT_SCALE
        values = {row['name']: row['percentage'] for row in result.data}
        assert values['De acuerdo'] == 67
        assert values['Neutral'] == 33


# ============================================================================
# CALIFICACIÓN
# ============================================================================

class TestRatingQuestions:

    def test_rounds_half_up_into_star_buckets(self, survey_schema, make_response):
        responses = [make_response(answers={'estrellas': v}) for v in (4.5, 3.5, 2.4, 5)]
        report = aggregate_survey_results(survey_schema, responses)

        result = _result(report, 'estrellas')
        counts = {row['name']: row['value'] for row in result.data}
        assert counts == {'5 ★': 2, '4 ★': 1, '3 ★': 0, '2 ★': 1, '1 ★': 0}
        assert result.total == 4

    def test_out_of_range_values_are_ignored(self, survey_schema, make_response):
        responses = [make_response(answers={'estrellas': v}) for v in (0, 7, 'alto', 3)]
        result = _result(aggregate_survey_results(survey_schema, responses), 'estrellas')

        assert result.total == 1

    def test_non_finite_values_are_ignored(self, survey_schema, make_response):
        responses = [
            make_response(answers={'estrellas': float('nan'), 'nps_q': float('nan')}),
            make_response(answers={'estrellas': float('inf'), 'nps_q': float('-inf')}),
            make_response(answers={'estrellas': 4, 'nps_q': 10}),
        ]
        report = aggregate_survey_results(survey_schema, responses)

        assert _result(report, 'estrellas').total == 1
        assert _result(report, 'nps_q').total == 1
        assert report.avg_rating == 4
        assert report.nps_score == 100
        json.dumps(report.to_dict(), allow_nan=False)

    def test_survey_rating_distribution_and_average(self, survey_schema, make_response):
        responses = [make_response(answers={'estrellas': v}) for v in (5, 5, 4, 2)]
        report = aggregate_survey_results(survey_schema, responses)

        assert report.avg_rating == pytest.approx(4)
        assert [row['rating'] for row in report.rating_distribution] == [
            '5 estrellas', '4 estrellas', '3 estrellas', '2 estrellas', '1 estrellas',
        ]
        assert report.rating_distribution[0] == {'rating': '5 estrellas', 'count': 2, 'percentage': 50}


# ============================================================================
# NPS
# ============================================================================

def test_nps_question_split(survey_schema, make_response):
    responses = [make_response(answers={'nps_q': v}) for v in (10, 9, 8, 3)]
    report = aggregate_survey_results(survey_schema, responses)

    result = _result(report, 'nps_q')
    assert [(row['name'], row['value']) for row in result.data] == [
        ('Promotores', 2), ('Neutros', 1), ('Detractores', 1),
    ]
    assert result.data[0]['percentage'] == 50
    assert result.data[0]['color'] == '#22c55e'
    assert report.nps_score == pytest.approx(25)
    assert report.nps_data[2]['category'] == 'Detractores'
    assert report.nps_data[2]['count'] == 1


def test_nps_without_answers(survey_schema, make_response):
    report = aggregate_survey_results(survey_schema, [make_response(answers={'comment': 'hola mundo'})])

    assert report.nps_score == 0
    assert all(row['count'] == 0 and row['percentage'] == 0 for row in report.nps_data)


# ============================================================================
# TEXTO LIBRE
# ============================================================================

def test_text_keeps_newest_samples(survey_schema, make_response):
    responses = [
        make_response(answers={'comment': f'Comentario {i}'}, hours_ago=i, sede='Centro')
        for i in range(12)
    ]
    responses.append(make_response(answers={'comment': '   '}))
    result = _result(aggregate_survey_results(survey_schema, responses), 'comment')

    assert result.total == 12
    assert len(result.data) == TEXT_SAMPLE_SIZE
    assert result.data[0] == {'text': 'Comentario 0', 'date': '2026-10-19', 'sede': 'Centro'}
    assert result.data[-1]['text'] == 'Comentario 9'


def test_text_without_date_is_labeled_recent(survey_schema):
    from core.services.records import ResponseRecord
    responses = [ResponseRecord(survey_id=1, answers={'comment': 'sin fecha'})]
    result = _result(aggregate_survey_results(survey_schema, responses), 'comment')

    assert result.data == [{'text': 'sin fecha', 'date': 'Reciente', 'sede': 'General'}]


# ============================================================================
# ESTRUCTURA DEL REPORTE
# ============================================================================

def test_question_order_follows_schema(survey_schema, make_response):
    report = aggregate_survey_results(survey_schema, [make_response()])
    assert [q.question_id for q in report.question_results] == [q.id for q in survey_schema.questions]


def test_missing_schema_returns_only_summary(make_response):
    report = aggregate_survey_results(None, [make_response(), make_response()])

    assert report.total_responses == 2
    assert report.question_results == []


def test_empty_input():
    report = aggregate_survey_results(None, [])

    assert isinstance(report, ResultsReport)
    assert report.total_responses == 0
    assert report.avg_rating == 0
    assert sum(d['responses'] for d in report.responses_by_day) == 0


def test_responses_by_day_starts_on_sunday(survey_schema, make_response):
    # 19/10/2026 es lunes
    report = aggregate_survey_results(survey_schema, [make_response(hours_ago=0), make_response(hours_ago=24)])

    assert [d['day'] for d in report.responses_by_day][0] == 'Dom'
    by_day = {d['day']: d['responses'] for d in report.responses_by_day}
    assert by_day['Lun'] == 1
    assert by_day['Dom'] == 1


def test_to_dict_uses_camel_case(survey_schema, make_response):
    data = aggregate_survey_results(survey_schema, [make_response(answers={'nps_q': 10})]).to_dict()

    assert set(data) == {
        'totalResponses', 'avgRating', 'ratingDistribution', 'npsData',
        'npsScore', 'responsesByDay', 'questionResults',
    }
    assert data['questionResults'][0]['questionId'] == 'nps_q'
