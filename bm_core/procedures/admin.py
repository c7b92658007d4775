# backend/bm_core/procedures/admin.py
from django.contrib import admin

from bm_core.procedures.models import Procedure


@admin.register(Procedure)
class ProcedureAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "company", "created_at")
    list_filter = ("company",)
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
