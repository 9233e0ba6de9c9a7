"""core/services/analytics.py

Motor de agregación global del dashboard de analítica.

`aggregate_dashboard` es una función pura sobre (encuestas, respuestas): recorre
las respuestas una sola vez acumulando sumas por sede, día, hora y encuesta, y
después deriva NPS, drivers de satisfacción, riesgo por sede, heatmap y temas.
`get_analytics_dashboard` obtiene los datos del almacenamiento y la invoca.
"""
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.utils import timezone

from core.services.records import CHOICE_TYPES, ResponseRecord, SurveySchema
from core.utils.helpers import as_aware, camelize_keys, is_number, safe_mean
from core.utils.logging_utils import StructuredLogger, log_performance

logger = StructuredLogger('core.services.analytics')

SHORT_DAYS = ['Lun', 'Mar', 'Mié', 'Jue', 'Vie', 'Sáb', 'Dom']

# Umbrales NPS: escala nativa 0-10 y respaldo con el rating 0-5
NPS_PROMOTER_MIN = 9
NPS_DETRACTOR_MAX = 6
RATING_PROMOTER_MIN = 4
RATING_DETRACTOR_MAX = 3

MAX_COMPLETION_SECONDS = 3600
RECENT_WINDOW = timedelta(hours=24)
WINDOW_DAYS = 7

TOP_DRIVERS = 5
TOP_CLUSTERS = 4
TOP_SURVEYS = 5

COMMENT_KEY = 'comment'
COMMENT_MIN_LENGTH = 5
TOPIC_KEYWORDS = ('atención', 'servicio', 'precio', 'comida', 'limpieza', 'tiempo', 'espera', 'calidad')

RISK_HIGH = 'high'
RISK_MEDIUM = 'medium'
RISK_LOW = 'low'
RISK_WEIGHTS = {RISK_HIGH: 3, RISK_MEDIUM: 2, RISK_LOW: 1}
RISK_REASONS = {
    RISK_HIGH: 'Caída drástica de satisfacción en las últimas 24h',
    RISK_MEDIUM: 'Baja satisfacción histórica',
    RISK_LOW: 'Rendimiento estable',
}

DELETED_SURVEY_NAME = 'Eliminada'


# --- 1. ENTIDADES DEL REPORTE ---

@dataclass
class LocationPerformance:
    sede: str
    responses: int
    satisfaction: float


@dataclass
class SatisfactionDriver:
    question: str
    driver: str
    impact: float
    responses: int


@dataclass
class RiskFactor:
    target: str
    risk_level: str
    reason: str


@dataclass
class HeatmapCell:
    day: str
    hour: int
    satisfaction: float


@dataclass
class CustomerCluster:
    tag: str
    sentiment: str
    count: int


@dataclass
class AnalyticsReport:
    total_responses: int = 0
    total_surveys: int = 0
    avg_satisfaction: float = 0
    global_nps: float = 0
    nps_breakdown: Dict[str, int] = field(
        default_factory=lambda: {'promoters': 0, 'passives': 0, 'detractors': 0, 'total': 0}
    )
    avg_completion_time: float = 0
    location_performance: List[LocationPerformance] = field(default_factory=list)
    responses_by_day: List[Dict[str, Any]] = field(default_factory=list)
    hourly_distribution: List[Dict[str, Any]] = field(default_factory=list)
    top_surveys: List[Dict[str, Any]] = field(default_factory=list)
    satisfaction_drivers: List[SatisfactionDriver] = field(default_factory=list)
    risk_analysis: List[RiskFactor] = field(default_factory=list)
    heatmap: List[HeatmapCell] = field(default_factory=list)
    customer_clusters: List[CustomerCluster] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Payload camelCase para la capa de presentación."""
        data = camelize_keys(asdict(self))
        data['heatmapData'] = data.pop('heatmap')
        return data


# --- 2. MOTORES ESPECÍFICOS ---

class NpsClassifier:
    """Clasifica cada respuesta como promotora, pasiva o detractora."""

    PROMOTER = 'promoter'
    PASSIVE = 'passive'
    DETRACTOR = 'detractor'

    @staticmethod
    def nps_answer(response: ResponseRecord, survey: Optional[SurveySchema]):
        """Primer valor 0-10 respondido en una pregunta de tipo 'nps' (orden del esquema)."""
        if survey is None:
            return None
        for question in survey.questions:
            if question.type != 'nps':
                continue
            value = response.answers.get(question.id)
            if is_number(value) and 0 <= value <= 10:
                return value
        return None

    @staticmethod
    def classify(response: ResponseRecord, survey: Optional[SurveySchema]) -> Optional[str]:
        value = NpsClassifier.nps_answer(response, survey)
        if value is not None:
            if value >= NPS_PROMOTER_MIN:
                return NpsClassifier.PROMOTER
            if value <= NPS_DETRACTOR_MAX:
                return NpsClassifier.DETRACTOR
            return NpsClassifier.PASSIVE

        rating = response.rating_value
        if rating > 0:
            if rating >= RATING_PROMOTER_MIN:
                return NpsClassifier.PROMOTER
            if rating <= RATING_DETRACTOR_MAX:
                return NpsClassifier.DETRACTOR
            return NpsClassifier.PASSIVE
        return None

    @staticmethod
    def score(promoters: int, detractors: int, total: int) -> float:
        if total == 0:
            return 0
        return (promoters - detractors) / total * 100


class RiskEngine:
    @staticmethod
    def classify(historical_avg: float, recent_avg: float):
        if recent_avg < 3.0 or (historical_avg > 4.0 and recent_avg < 3.5):
            return RISK_HIGH
        if historical_avg < 3.5:
            return RISK_MEDIUM
        return RISK_LOW

    @staticmethod
    def analyze(location_stats: Dict[str, '_LocationStats']) -> List[RiskFactor]:
        factors = []
        for sede, stats in location_stats.items():
            # Sin calificaciones el promedio vale 0 y la sede queda en riesgo alto
            historical = safe_mean(stats.rating_sum, stats.rated)
            recent = safe_mean(stats.recent_sum, stats.recent_rated) if stats.recent_rated else historical
            level = RiskEngine.classify(historical, recent)
            factors.append(RiskFactor(target=sede, risk_level=level, reason=RISK_REASONS[level]))
        # sorted() es estable: el orden de aparición se conserva dentro de cada nivel
        return sorted(factors, key=lambda f: RISK_WEIGHTS[f.risk_level], reverse=True)


class TopicEngine:
    @staticmethod
    def count_keywords(text: str, counter: Dict[str, int]) -> None:
        for word in text.lower().split():
            if word in TOPIC_KEYWORDS:
                counter[word] += 1

    @staticmethod
    def clusters(counter: Dict[str, int]) -> List[CustomerCluster]:
        ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)[:TOP_CLUSTERS]
        return [
            CustomerCluster(tag=tag[:1].upper() + tag[1:], sentiment='neutral', count=count)
            for tag, count in ranked
        ]


# --- 3. ACUMULADOR DE UNA PASADA ---

@dataclass
class _LocationStats:
    responses: int = 0
    rating_sum: float = 0
    rated: int = 0
    recent_sum: float = 0
    recent_rated: int = 0


@dataclass
class _MeanStats:
    total: float = 0
    count: int = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    @property
    def mean(self) -> float:
        return safe_mean(self.total, self.count)


def _local(dt: datetime) -> datetime:
    return timezone.localtime(as_aware(dt))


class GlobalMetricsAggregator:
    """Acumula todas las sumas del dashboard en una sola pasada sobre las respuestas."""

    def __init__(self, surveys: Sequence[SurveySchema], now: datetime):
        self.surveys = {s.id: s for s in surveys}
        self.total_surveys = len(surveys)
        self.now = as_aware(now)
        self.recent_since = self.now - RECENT_WINDOW

        today = _local(self.now).date()
        self.window_dates = [today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]

        self.total_responses = 0
        self.rating = _MeanStats()
        self.completion = _MeanStats()
        self.nps = {NpsClassifier.PROMOTER: 0, NpsClassifier.PASSIVE: 0, NpsClassifier.DETRACTOR: 0}
        self.locations: Dict[str, _LocationStats] = {}
        self.day_counts = {d: 0 for d in self.window_dates}
        self.hour_counts = {h: 0 for h in range(24)}
        self.heat: Dict[tuple, _MeanStats] = defaultdict(_MeanStats)
        self.per_survey: Dict[Any, _LocationStats] = {}
        self.drivers: Dict[tuple, _MeanStats] = {}
        self.topics: Dict[str, int] = defaultdict(int)

    def add(self, response: ResponseRecord) -> None:
        self.total_responses += 1
        rating = response.rating_value
        rated = rating > 0
        survey = self.surveys.get(response.survey_id)

        if rated:
            self.rating.add(rating)

        category = NpsClassifier.classify(response, survey)
        if category is not None:
            self.nps[category] += 1

        created_at = as_aware(response.created_at)
        started_at = as_aware(response.started_at)

        if started_at and created_at:
            elapsed = (created_at - started_at).total_seconds()
            if 0 < elapsed < MAX_COMPLETION_SECONDS:
                self.completion.add(elapsed)

        is_recent = bool(created_at and created_at > self.recent_since)
        self._add_bucket(self.locations, response.location, rating, is_recent)
        self._add_bucket(self.per_survey, response.survey_id, rating, False)

        if created_at:
            local_dt = _local(created_at)
            self.hour_counts[local_dt.hour] += 1
            day = local_dt.date()
            if day in self.day_counts:
                self.day_counts[day] += 1
                cell = self.heat[(day, local_dt.hour)]
                if rated:
                    cell.add(rating)

        if rated:
            self._add_answers(response, survey, rating)

    @staticmethod
    def _add_bucket(buckets, key, rating: float, is_recent: bool) -> None:
        stats = buckets.get(key)
        if stats is None:
            stats = buckets[key] = _LocationStats()
        stats.responses += 1
        if rating > 0:
            stats.rating_sum += rating
            stats.rated += 1
            if is_recent:
                stats.recent_sum += rating
                stats.recent_rated += 1

    def _add_answers(self, response: ResponseRecord, survey: Optional[SurveySchema], rating: float) -> None:
        for question_id, answer in response.answers.items():
            if not isinstance(answer, str):
                continue
            if question_id == COMMENT_KEY and len(answer) > COMMENT_MIN_LENGTH:
                TopicEngine.count_keywords(answer, self.topics)
            question = survey.question(question_id) if survey else None
            if question is None or question.type not in CHOICE_TYPES or answer not in question.choices:
                continue
            key = (question.title, answer)
            stats = self.drivers.get(key)
            if stats is None:
                stats = self.drivers[key] = _MeanStats()
            stats.add(rating)

    # --- CÁLCULOS DERIVADOS ---

    def _satisfaction_drivers(self, avg: float) -> List[SatisfactionDriver]:
        drivers = [
            SatisfactionDriver(question=title, driver=answer, impact=stats.mean - avg, responses=stats.count)
            for (title, answer), stats in self.drivers.items()
        ]
        drivers.sort(key=lambda d: abs(d.impact), reverse=True)
        return drivers[:TOP_DRIVERS]

    def _top_surveys(self) -> List[Dict[str, Any]]:
        rows = []
        for survey_id, stats in self.per_survey.items():
            survey = self.surveys.get(survey_id)
            rows.append({
                'name': survey.name if survey else DELETED_SURVEY_NAME,
                'responses': stats.responses,
                'rating': safe_mean(stats.rating_sum, stats.rated),
            })
        rows.sort(key=lambda row: row['responses'], reverse=True)
        return rows[:TOP_SURVEYS]

    def _heatmap(self) -> List[HeatmapCell]:
        cells = []
        for day in self.window_dates:
            label = SHORT_DAYS[day.weekday()]
            for hour in range(24):
                stats = self.heat.get((day, hour))
                cells.append(HeatmapCell(day=label, hour=hour, satisfaction=stats.mean if stats else 0))
        return cells

    def build(self) -> AnalyticsReport:
        avg = self.rating.mean
        promoters = self.nps[NpsClassifier.PROMOTER]
        detractors = self.nps[NpsClassifier.DETRACTOR]
        nps_total = sum(self.nps.values())

        return AnalyticsReport(
            total_responses=self.total_responses,
            total_surveys=self.total_surveys,
            avg_satisfaction=avg,
            global_nps=NpsClassifier.score(promoters, detractors, nps_total),
            nps_breakdown={
                'promoters': promoters,
                'passives': self.nps[NpsClassifier.PASSIVE],
                'detractors': detractors,
                'total': nps_total,
            },
            avg_completion_time=self.completion.mean,
            location_performance=[
                LocationPerformance(sede=sede, responses=s.responses, satisfaction=safe_mean(s.rating_sum, s.rated))
                for sede, s in self.locations.items()
            ],
            responses_by_day=[
                {'day': SHORT_DAYS[d.weekday()], 'date': d.isoformat(), 'responses': self.day_counts[d]}
                for d in self.window_dates
            ],
            hourly_distribution=[
                {'hour': f"{h}:00", 'responses': count} for h, count in self.hour_counts.items()
            ],
            top_surveys=self._top_surveys(),
            satisfaction_drivers=self._satisfaction_drivers(avg),
            risk_analysis=RiskEngine.analyze(self.locations),
            heatmap=self._heatmap(),
            customer_clusters=TopicEngine.clusters(self.topics),
        )


# --- 4. SERVICIO PRINCIPAL ---

def aggregate_dashboard(surveys: Sequence[SurveySchema], responses: Sequence[ResponseRecord],
                        now: Optional[datetime] = None) -> AnalyticsReport:
    """
    Reporte global a partir de las encuestas del propietario y sus respuestas.

    Sin respuestas devuelve un reporte en cero con todas las listas vacías.
    No modifica los registros de entrada.
    """
    if not responses:
        return AnalyticsReport(total_surveys=len(surveys))

    aggregator = GlobalMetricsAggregator(surveys, now or timezone.now())
    for response in responses:
        aggregator.add(response)
    return aggregator.build()


@log_performance()
async def get_analytics_dashboard(owner_id, location_filter: Optional[str] = None,
                                  now: Optional[datetime] = None) -> AnalyticsReport:
    """Obtiene encuestas y respuestas del propietario y calcula el reporte global."""
    from surveys.repositories import fetch_owner_surveys, fetch_responses

    try:
        surveys = await sync_to_async(fetch_owner_surveys, thread_sensitive=True)(owner_id)
        if not surveys:
            return AnalyticsReport()
        responses = await sync_to_async(fetch_responses, thread_sensitive=True)(
            [s.id for s in surveys], location_filter
        )
    except Exception:
        logger.exception("Error obteniendo datos de analítica", owner_id=owner_id, sede=location_filter)
        raise

    logger.info(
        "Calculando dashboard de analítica",
        owner_id=owner_id, surveys=len(surveys), responses=len(responses), sede=location_filter or 'all',
    )
    return aggregate_dashboard(surveys, responses, now=now)
