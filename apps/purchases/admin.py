from django.contrib import admin
from .models import Purchase
from .services import format_currency


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Admin interface for loyalty purchases.

    Purchases are an append-only ledger: they can be browsed and searched
    but not edited or deleted here.
    """

    list_display = [
        'client_name',
        'client_tax_id',
        'get_amount_display',
        'purchased_at',
    ]
    list_filter = ['purchased_at']
    search_fields = ['client_name', 'client_tax_id']
    date_hierarchy = 'purchased_at'
    ordering = ['-purchased_at']
    readonly_fields = ['id', 'client_name', 'client_tax_id', 'amount', 'purchased_at']

    def get_amount_display(self, obj):
        return format_currency(obj.amount)
    get_amount_display.short_description = 'Amount'
    get_amount_display.admin_order_field = 'amount'

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
