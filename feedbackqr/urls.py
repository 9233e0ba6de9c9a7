# feedbackqr/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),

    # Analytics (Core)
    path("analytics/", include("core.urls")),
]

# Configurar handlers de error personalizados
handler404 = 'feedbackqr.views.custom_404'
handler500 = 'feedbackqr.views.custom_500'
