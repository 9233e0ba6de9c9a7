# core/admin.py
from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'company_name', 'plan')
    list_filter = ('plan',)
    list_editable = ('plan',)
    search_fields = ('user__username', 'user__email', 'company_name')
