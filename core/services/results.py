"""core/services/results.py

Resultados por pregunta de una encuesta.

Cada pregunta del esquema produce un desglose según su tipo declarado
(texto, opción múltiple, likert, calificación, NPS); además se calcula el
resumen de rating y NPS a nivel de encuesta.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.utils import timezone

from core.services.records import ResponseRecord, SurveySchema, QuestionSchema
from core.utils.helpers import as_aware, camelize_keys, is_number, percentage, round_half_up, safe_mean
from core.utils.logging_utils import StructuredLogger, log_performance

logger = StructuredLogger('core.services.results')

STARS = [5, 4, 3, 2, 1]
TEXT_SAMPLE_SIZE = 10
RECENT_LABEL = 'Reciente'

# Orden de presentación: domingo primero
WEEK_DAYS = ['Dom', 'Lun', 'Mar', 'Mié', 'Jue', 'Vie', 'Sáb']

NPS_COLORS = {
    'Promotores': '#22c55e',
    'Neutros': '#f59e0b',
    'Detractores': '#ef4444',
}


@dataclass
class QuestionResult:
    question_id: str
    title: str
    type: str
    total: int = 0
    data: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ResultsReport:
    total_responses: int = 0
    avg_rating: float = 0
    rating_distribution: List[Dict[str, Any]] = field(default_factory=list)
    nps_data: List[Dict[str, Any]] = field(default_factory=list)
    nps_score: float = 0
    responses_by_day: List[Dict[str, Any]] = field(default_factory=list)
    question_results: List[QuestionResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return camelize_keys(asdict(self))


class _NpsSplit:
    def __init__(self):
        self.promoters = 0
        self.passives = 0
        self.detractors = 0

    @property
    def total(self) -> int:
        return self.promoters + self.passives + self.detractors

    def add(self, value) -> None:
        if value >= 9:
            self.promoters += 1
        elif value >= 7:
            self.passives += 1
        else:
            self.detractors += 1

    def merge(self, other: '_NpsSplit') -> None:
        self.promoters += other.promoters
        self.passives += other.passives
        self.detractors += other.detractors

    def score(self) -> float:
        if not self.total:
            return 0
        return (self.promoters - self.detractors) / self.total * 100

    def rows(self, label_key: str, value_key: str) -> List[Dict[str, Any]]:
        total = self.total
        return [
            {label_key: name, value_key: count, 'percentage': percentage(count, total), 'color': NPS_COLORS[name]}
            for name, count in (
                ('Promotores', self.promoters),
                ('Neutros', self.passives),
                ('Detractores', self.detractors),
            )
        ]


def _format_date(dt) -> str:
    if dt is None:
        return RECENT_LABEL
    return timezone.localtime(as_aware(dt)).date().isoformat()


def _newest_first(responses: Sequence[ResponseRecord]) -> List[ResponseRecord]:
    dated = sorted((r for r in responses if r.created_at), key=lambda r: as_aware(r.created_at), reverse=True)
    return dated + [r for r in responses if not r.created_at]


class QuestionResultsAggregator:
    """Recorre las respuestas contra el esquema de una encuesta."""

    def __init__(self, responses: Sequence[ResponseRecord]):
        self.responses = list(responses)
        self.rating_counts = {star: 0 for star in STARS}
        self.rating_sum = 0.0
        self.nps = _NpsSplit()

    def text(self, question: QuestionSchema, result: QuestionResult) -> None:
        samples = []
        for response in _newest_first(self.responses):
            answer = response.answers.get(question.id)
            if not isinstance(answer, str) or not answer.strip():
                continue
            result.total += 1
            if len(samples) < TEXT_SAMPLE_SIZE:
                samples.append({
                    'text': answer,
                    'date': _format_date(response.created_at),
                    'sede': response.location,
                })
        result.data = samples

    def choice(self, question: QuestionSchema, result: QuestionResult) -> None:
        options = question.choices
        counts = {option: 0 for option in options}
        for response in self.responses:
            answer = response.answers.get(question.id)
            if isinstance(answer, str) and answer in counts:
                counts[answer] += 1
                result.total += 1
        result.data = [
            {'name': option, 'value': counts[option], 'percentage': percentage(counts[option], result.total)}
            for option in options
        ]

    def rating(self, question: QuestionSchema, result: QuestionResult) -> None:
        counts = {star: 0 for star in STARS}
        for response in self.responses:
            value = response.answers.get(question.id)
            if not is_number(value) or not value:
                continue
            star = round_half_up(value)
            if star not in counts:
                continue
            counts[star] += 1
            result.total += 1
            self.rating_counts[star] += 1
            self.rating_sum += value
        result.data = [
            {'name': f"{star} ★", 'value': counts[star], 'percentage': percentage(counts[star], result.total)}
            for star in STARS
        ]

    def nps_question(self, question: QuestionSchema, result: QuestionResult) -> None:
        split = _NpsSplit()
        for response in self.responses:
            value = response.answers.get(question.id)
            if is_number(value) and 0 <= value <= 10:
                split.add(value)
        result.total = split.total
        result.data = split.rows('name', 'value')
        self.nps.merge(split)

    def question_result(self, question: QuestionSchema) -> QuestionResult:
        result = QuestionResult(question_id=question.id, title=question.title, type=question.type)
        if question.type == 'text':
            self.text(question, result)
        elif question.type in ('multiple_choice', 'likert'):
            self.choice(question, result)
        elif question.type == 'rating':
            self.rating(question, result)
        elif question.type == 'nps':
            self.nps_question(question, result)
        else:
            logger.warning("Tipo de pregunta desconocido", question_id=question.id, type=question.type)
        return result

    def responses_by_day(self) -> List[Dict[str, Any]]:
        counts = {day: 0 for day in WEEK_DAYS}
        for response in self.responses:
            if not response.created_at:
                continue
            dt = timezone.localtime(as_aware(response.created_at))
            # weekday(): lunes = 0; WEEK_DAYS empieza en domingo
            counts[WEEK_DAYS[(dt.weekday() + 1) % 7]] += 1
        return [{'day': day, 'responses': counts[day]} for day in WEEK_DAYS]

    def build(self, schema: Optional[SurveySchema]) -> ResultsReport:
        questions = schema.questions if schema else []
        question_results = [self.question_result(q) for q in questions]

        # Porcentajes sobre las respuestas de calificación válidas (1-5), no sobre
        # el total de respuestas de la encuesta: las que no califican no restan
        rated = sum(self.rating_counts.values())
        return ResultsReport(
            total_responses=len(self.responses),
            avg_rating=safe_mean(self.rating_sum, rated),
            rating_distribution=[
                {
                    'rating': f"{star} estrellas",
                    'count': self.rating_counts[star],
                    'percentage': percentage(self.rating_counts[star], rated),
                }
                for star in STARS
            ],
            nps_data=self.nps.rows('category', 'count'),
            nps_score=self.nps.score(),
            responses_by_day=self.responses_by_day(),
            question_results=question_results,
        )


def aggregate_survey_results(schema: Optional[SurveySchema], responses: Sequence[ResponseRecord]) -> ResultsReport:
    """Desglose por pregunta; las preguntas sin respuestas aparecen con total 0."""
    return QuestionResultsAggregator(responses).build(schema)


@log_performance()
async def get_survey_results(survey_id) -> ResultsReport:
    """Obtiene el esquema y las respuestas de una encuesta y calcula sus resultados."""
    from surveys.repositories import fetch_responses, fetch_survey_schema

    try:
        schema = await sync_to_async(fetch_survey_schema, thread_sensitive=True)(survey_id)
        responses = await sync_to_async(fetch_responses, thread_sensitive=True)([survey_id])
    except Exception:
        logger.exception("Error obteniendo resultados de encuesta", survey_id=survey_id)
        raise

    logger.info("Calculando resultados por pregunta", survey_id=survey_id, responses=len(responses))
    return aggregate_survey_results(schema, responses)
