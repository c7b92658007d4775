# backend/bm_core/appointments/admin.py
from django.contrib import admin

from bm_core.appointments.models import Appointment, AppointmentProcedure


class AppointmentProcedureInline(admin.TabularInline):
    model = AppointmentProcedure
    extra = 0
    can_delete = False
    readonly_fields = ("procedure", "position")


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("date", "client", "collaborator", "status", "value", "company")
    list_filter = ("company", "status")
    search_fields = ("client__name", "collaborator__first_name", "notes")
    readonly_fields = ("value", "primary_procedure", "created_at", "updated_at")
    ordering = ("-date",)
    inlines = [AppointmentProcedureInline]
