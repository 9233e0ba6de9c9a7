"""
surveys/models.py
Modelos principales para encuestas QR y sus respuestas.
"""
import secrets
from django.db import models
from django.conf import settings
from django.utils import timezone
from django.core.exceptions import ValidationError

from core.utils.helpers import is_number

DEFAULT_SEDE = 'General'


class Survey(models.Model):
    STATUS_CHOICES = [
        ('published', 'Publicada'),
        ('draft', 'Borrador'),
        ('paused', 'Pausada'),
        ('finished', 'Finalizada'),
    ]

    # Constantes para uso en código
    STATUS_PUBLISHED = 'published'
    STATUS_DRAFT = 'draft'
    STATUS_PAUSED = 'paused'
    STATUS_FINISHED = 'finished'

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='surveys')
    name = models.CharField(max_length=200, verbose_name="Nombre")
    description = models.TextField(blank=True, verbose_name="Descripción")
    sede = models.CharField(max_length=120, default=DEFAULT_SEDE, verbose_name="Sede")
    language = models.CharField(max_length=10, default='es')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PUBLISHED)
    created_at = models.DateTimeField(auto_now_add=True)

    # Identificador público seguro (URL del QR)
    public_id = models.CharField(max_length=12, unique=True, editable=False, null=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['owner', 'status'], name='surveys_sur_owner_i_3f1c2a_idx'),
        ]

    def save(self, *args, **kwargs):
        if not self.public_id:
            self.public_id = secrets.token_urlsafe(8)[:12]
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class Question(models.Model):
    """Entrada del esquema de preguntas de una encuesta."""
    TYPE_TEXT = 'text'
    TYPE_MULTIPLE_CHOICE = 'multiple_choice'
    TYPE_RATING = 'rating'
    TYPE_NPS = 'nps'
    TYPE_LIKERT = 'likert'

    TYPE_CHOICES = [
        (TYPE_TEXT, 'Texto libre'),
        (TYPE_MULTIPLE_CHOICE, 'Opción múltiple'),
        (TYPE_RATING, 'Calificación (1-5 estrellas)'),
        (TYPE_NPS, 'NPS (0-10)'),
        (TYPE_LIKERT, 'Escala Likert'),
    ]

    survey = models.ForeignKey(Survey, on_delete=models.CASCADE, related_name='questions')
    # Clave usada en SurveyResponse.answers
    key = models.CharField(max_length=64)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_TEXT)
    title = models.CharField(max_length=255, verbose_name="Pregunta")
    description = models.TextField(blank=True)
    required = models.BooleanField(default=False, verbose_name="Obligatoria")
    options = models.JSONField(default=list, blank=True)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['order']
        constraints = [
            models.UniqueConstraint(fields=['survey', 'key'], name='unique_question_key_per_survey'),
        ]

    def __str__(self):
        return f"{self.title[:50]} ({self.get_type_display()})"

    def clean(self):
        super().clean()
        if self.type == self.TYPE_MULTIPLE_CHOICE:
            if not isinstance(self.options, list) or not self.options:
                raise ValidationError({'options': 'Las preguntas de opción múltiple deben tener una lista de opciones.'})

    def as_schema(self):
        from core.services.records import QuestionSchema
        return QuestionSchema(
            id=self.key,
            type=self.type,
            title=self.title,
            options=list(self.options or []),
        )


class SurveyResponse(models.Model):
    """Una respuesta completa enviada desde el formulario público."""
    survey = models.ForeignKey(Survey, on_delete=models.CASCADE, related_name='responses')
    sede = models.CharField(max_length=120, blank=True, default='')
    answers = models.JSONField(default=dict, blank=True)
    # Promedio 0-5 calculado al enviar; 0 = sin respuestas calificables
    rating = models.FloatField(default=0)
    created_at = models.DateTimeField(default=timezone.now)
    started_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['survey', 'created_at'], name='surveys_sur_survey__8a2d41_idx'),
            models.Index(fields=['survey', 'sede'], name='surveys_sur_survey__c7e913_idx'),
        ]

    def __str__(self):
        return f"Resp: {self.survey_id} ({self.created_at:%d/%m %H:%M})"

    @staticmethod
    def compute_rating(questions, answers):
        """
        Calcula el rating 0-5 de una respuesta: promedio de las preguntas
        de calificación y de las NPS reescaladas (/2).
        """
        total = 0.0
        count = 0
        for question in questions:
            value = answers.get(question.key)
            if not is_number(value):
                continue
            if question.type == Question.TYPE_RATING and value:
                total += value
                count += 1
            elif question.type == Question.TYPE_NPS:
                total += value / 2
                count += 1
        return total / count if count else 0

    @classmethod
    def from_submission(cls, survey, answers, started_at=None):
        """Registra un envío del formulario público con su sede y rating."""
        questions = list(survey.questions.all())
        return cls.objects.create(
            survey=survey,
            sede=survey.sede or DEFAULT_SEDE,
            answers=answers,
            rating=cls.compute_rating(questions, answers),
            started_at=started_at or timezone.now(),
        )
