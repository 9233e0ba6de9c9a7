import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Survey',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Nombre')),
                ('description', models.TextField(blank=True, verbose_name='Descripción')),
                ('sede', models.CharField(default='General', max_length=120, verbose_name='Sede')),
                ('language', models.CharField(default='es', max_length=10)),
                ('status', models.CharField(choices=[('published', 'Publicada'), ('draft', 'Borrador'), ('paused', 'Pausada'), ('finished', 'Finalizada')], default='published', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('public_id', models.CharField(editable=False, max_length=12, null=True, unique=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='surveys', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['owner', 'status'], name='surveys_sur_owner_i_3f1c2a_idx')],
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=64)),
                ('type', models.CharField(choices=[('text', 'Texto libre'), ('multiple_choice', 'Opción múltiple'), ('rating', 'Calificación (1-5 estrellas)'), ('nps', 'NPS (0-10)'), ('likert', 'Escala Likert')], default='text', max_length=20)),
                ('title', models.CharField(max_length=255, verbose_name='Pregunta')),
                ('description', models.TextField(blank=True)),
                ('required', models.BooleanField(default=False, verbose_name='Obligatoria')),
                ('options', models.JSONField(blank=True, default=list)),
                ('order', models.PositiveIntegerField(default=0)),
                ('survey', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='surveys.survey')),
            ],
            options={
                'ordering': ['order'],
                'constraints': [models.UniqueConstraint(fields=('survey', 'key'), name='unique_question_key_per_survey')],
            },
        ),
        migrations.CreateModel(
            name='SurveyResponse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sede', models.CharField(blank=True, default='', max_length=120)),
                ('answers', models.JSONField(blank=True, default=dict)),
                ('rating', models.FloatField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('survey', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responses', to='surveys.survey')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['survey', 'created_at'], name='surveys_sur_survey__8a2d41_idx'),
                    models.Index(fields=['survey', 'sede'], name='surveys_sur_survey__c7e913_idx'),
                ],
            },
        ),
    ]
