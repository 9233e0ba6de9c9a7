"""
core/services/records.py
Registros planos que consumen los agregadores (independientes del ORM).
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.utils.helpers import is_number

DEFAULT_SEDE = 'General'

QUESTION_TYPES = ('text', 'multiple_choice', 'rating', 'nps', 'likert')
CHOICE_TYPES = ('multiple_choice', 'likert')
LIKERT_SCALE = ['Muy en desacuerdo', 'En desacuerdo', 'Neutral', 'De acuerdo', 'Muy de acuerdo']


@dataclass(frozen=True)
class QuestionSchema:
    """Entrada del esquema: id, tipo declarado, título y opciones."""

    id: str
    type: str
    title: str
    options: List[str] = field(default_factory=list)

    @property
    def choices(self) -> List[str]:
        """Respuestas válidas de una pregunta de opciones (likert usa la escala fija)."""
        if self.type == 'likert':
            return LIKERT_SCALE
        return list(self.options)


@dataclass(frozen=True)
class SurveySchema:
    id: Any
    name: str
    questions: List[QuestionSchema] = field(default_factory=list)

    def question(self, question_id: str) -> Optional[QuestionSchema]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None


@dataclass(frozen=True)
class ResponseRecord:
    """Respuesta individual tal como la entrega el almacenamiento (solo lectura)."""

    survey_id: Any
    answers: Dict[str, Any] = field(default_factory=dict)
    rating: float = 0
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    sede: Optional[str] = None
    id: Any = None

    @property
    def location(self) -> str:
        return self.sede or DEFAULT_SEDE

    @property
    def rating_value(self) -> float:
        """Rating numérico; cualquier valor no numérico, no finito o <= 0 cuenta como 0."""
        value = self.rating
        if not is_number(value):
            return 0
        return value if value > 0 else 0
