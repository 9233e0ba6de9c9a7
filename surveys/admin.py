# surveys/admin.py
from django.contrib import admin
from django.db.models import Count
from django.utils.html import format_html
from .models import Survey, Question, SurveyResponse


class QuestionInline(admin.StackedInline):
    model = Question
    extra = 0
    fields = ('key', 'title', 'type', 'options', 'required', 'order')
    ordering = ['order']


@admin.register(Survey)
class SurveyAdmin(admin.ModelAdmin):
    list_display = ('name', 'status_badge', 'owner', 'sede', 'response_count', 'created_at')
    list_filter = ('status', 'sede', 'created_at')
    search_fields = ('name', 'description', 'owner__username')
    inlines = [QuestionInline]
    readonly_fields = ('created_at', 'public_id')
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(_response_count=Count('responses', distinct=True))

    def status_badge(self, obj):
        colors = {
            'published': '#28a745',
            'draft': '#6c757d',
            'paused': '#ffc107',
            'finished': '#dc3545',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Estado'

    def response_count(self, obj):
        return obj._response_count
    response_count.short_description = 'Respuestas'
    response_count.admin_order_field = '_response_count'


@admin.register(SurveyResponse)
class SurveyResponseAdmin(admin.ModelAdmin):
    list_display = ('id', 'survey', 'sede', 'rating', 'created_at')
    list_filter = ('sede', 'created_at')
    search_fields = ('survey__name', 'sede')
    readonly_fields = ('survey', 'answers', 'rating', 'created_at', 'started_at')
    date_hierarchy = 'created_at'
