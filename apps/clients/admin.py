from django.contrib import admin
from apps.clients.models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """Admin interface for loyalty clients."""

    list_display = [
        'name',
        'tax_id',
        'city',
        'neighborhood',
        'phone',
        'registered_at'
    ]
    list_filter = [
        'city',
        'registered_at'
    ]
    search_fields = [
        'name',
        'tax_id',
        'tax_id_digits',
        'city',
        'phone'
    ]
    readonly_fields = [
        'tax_id_digits',
        'registered_at',
        'updated_at'
    ]
    ordering = ['-registered_at']

    def has_delete_permission(self, request, obj=None):
        """Clients are kept for purchase history."""
        return False
