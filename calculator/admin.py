from django.contrib import admin
from .models import TurnoverEntry


@admin.register(TurnoverEntry)
class TurnoverEntryAdmin(admin.ModelAdmin):
    list_display = ['date', 'entry_type', 'amount', 'description', 'user', 'is_deleted']
    list_filter = ['entry_type', 'is_deleted', 'date']
    search_fields = ['description', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
