"""
Django Admin configuration for the Operations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from apps.operations.infrastructure.persistence.models import (
    OrganizationSettings,
    Payment,
    PaymentStatus,
    PurchaseOrder,
    SalesLineItem,
    SalesOrder,
)


def _flag(value: bool, on: str, off: str):
    if value:
        return format_html('<span style="color: green; font-weight: bold;">● {}</span>', on)
    return format_html('<span style="color: #999;">○ {}</span>', off)


@admin.register(OrganizationSettings)
class OrganizationSettingsAdmin(admin.ModelAdmin):
    """Admin interface for exchange rates and other organisation settings."""

    list_display = ('settings_key', 'jpy_per_usd', 'vnd_per_usd', 'default_currency', 'updated_at')
    readonly_fields = ('id', 'created_at', 'updated_at')

    fieldsets = (
        ('Exchange Rates (1 USD =)', {
            'fields': ('settings_key', 'jpy_per_usd', 'vnd_per_usd', 'default_currency')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    """Admin interface for PurchaseOrder model."""

    list_display = (
        'purchase_order_id',
        'order_date',
        'supplier',
        'currency',
        'amount',
        'get_order_sent',
    )
    list_filter = ('currency', 'order_sent', 'delivered', 'paid', 'order_date')
    search_fields = ('purchase_order_id', 'supplier')
    readonly_fields = ('id', 'created_at', 'updated_at')
    date_hierarchy = 'order_date'
    actions = ['mark_order_sent']

    def get_order_sent(self, obj):
        return _flag(obj.order_sent, 'Sent', 'Not sent')
    get_order_sent.short_description = 'Order document'

    @admin.action(description='Mark purchase order document as sent')
    def mark_order_sent(self, request, queryset):
        updated = queryset.update(order_sent=True)
        self.message_user(request, f'{updated} purchase order(s) marked as sent.')


class SalesLineItemInline(admin.TabularInline):
    model = SalesLineItem
    extra = 0
    fields = ('product_code', 'product_name', 'order_quantity', 'shipped_quantity', 'unit_price')


@admin.register(SalesOrder)
class SalesOrderAdmin(admin.ModelAdmin):
    """Admin interface for SalesOrder model with inline line items."""

    list_display = (
        'sales_order_id',
        'order_no',
        'order_date',
        'customer_name',
        'currency',
        'get_order_received',
    )
    list_filter = ('currency', 'order_received', 'shipped', 'paid', 'order_date')
    search_fields = ('sales_order_id', 'order_no', 'customer_name')
    readonly_fields = ('id', 'created_at', 'updated_at')
    date_hierarchy = 'order_date'
    inlines = [SalesLineItemInline]

    def get_order_received(self, obj):
        return _flag(obj.order_received, 'Received', 'Pending')
    get_order_received.short_description = 'Customer order'


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for Payment model."""

    list_display = (
        'payment_id',
        'year_month',
        'category',
        'currency',
        'amount',
        'payment_date',
        'get_status',
    )
    list_filter = ('year_month', 'status', 'currency', 'is_fixed_cost')
    search_fields = ('payment_id', 'category', 'content', 'transfer_destination_name')
    readonly_fields = ('id', 'created_at', 'updated_at')
    actions = ['mark_paid']

    def get_status(self, obj):
        return _flag(obj.status == PaymentStatus.PAID, 'Paid', 'Unpaid')
    get_status.short_description = 'Status'

    @admin.action(description='Mark selected payments as paid')
    def mark_paid(self, request, queryset):
        updated = queryset.update(status=PaymentStatus.PAID)
        self.message_user(request, f'{updated} payment(s) marked as paid.')
