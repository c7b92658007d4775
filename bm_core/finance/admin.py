# backend/bm_core/finance/admin.py
from django.contrib import admin

from bm_core.finance.models import FinancialGoal, FinancialRecord


@admin.register(FinancialRecord)
class FinancialRecordAdmin(admin.ModelAdmin):
    list_display = ("date", "type", "category", "value", "description", "company")
    list_filter = ("company", "type", "category")
    search_fields = ("description",)
    readonly_fields = ("appointment", "created_at", "updated_at")
    ordering = ("-date",)


@admin.register(FinancialGoal)
class FinancialGoalAdmin(admin.ModelAdmin):
    list_display = ("period", "target", "start_date", "end_date", "company")
    list_filter = ("company", "period")
    ordering = ("-start_date",)
