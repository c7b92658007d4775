# backend/bm_core/iam/admin.py
from django.contrib import admin

from bm_core.iam.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "company", "role", "function", "phone", "created_at")
    list_filter = ("role", "company")
    search_fields = ("user__username", "user__first_name", "phone")
    readonly_fields = ("id", "created_at", "updated_at")
    ordering = ("-created_at",)
