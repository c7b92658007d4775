# backend/bm_core/clients/admin.py
from django.contrib import admin

from bm_core.clients.models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "company", "created_at")
    list_filter = ("company",)
    search_fields = ("name", "phone")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
