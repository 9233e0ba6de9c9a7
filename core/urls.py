# core/urls.py
from django.urls import path
from . import views

app_name = "core"

urlpatterns = [
    # --- Dashboard de analítica global ---
    path("", views.analytics_dashboard_view, name="analytics_dashboard"),

    # --- Resultados por pregunta ---
    path("results/<int:survey_id>/", views.survey_results_view, name="survey_results"),
]
