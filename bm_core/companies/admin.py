# backend/bm_core/companies/admin.py
from django.contrib import admin

from bm_core.companies.models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "invite_code", "created_at", "updated_at")
    search_fields = ("name", "invite_code")
    ordering = ("-created_at",)
    readonly_fields = ("id", "invite_code", "created_at", "updated_at")
