# backend/bm_core/audit/admin.py
from django.contrib import admin

from bm_core.audit.models import AuditEvent


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ("occurred_at", "company", "event_code", "entity_type", "entity_id", "actor_user")
    list_filter = ("event_code", "entity_type", "company")
    search_fields = ("entity_id", "actor_user__email")
    date_hierarchy = "occurred_at"

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
