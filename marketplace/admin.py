from django.contrib import admin

from .models import Order, OrderItem, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'seller', 'price', 'available', 'created_at')
    list_filter = ('available', 'created_at')
    search_fields = ('name', 'description', 'seller__email')
    readonly_fields = ('id', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'description', 'seller')
        }),
        ('Pricing & availability', {
            'fields': ('price', 'available')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ('position', 'product', 'quantity')
    readonly_fields = ('position', 'product', 'quantity')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('short_id', 'buyer', 'status', 'item_count', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('id', 'buyer__email', 'buyer__username')
    readonly_fields = ('id', 'buyer', 'status', 'created_at', 'updated_at')
    inlines = [OrderItemInline]

    def short_id(self, obj):
        return str(obj.id)[:8]
    short_id.short_description = "Order"

    def item_count(self, obj):
        return obj.items.count()
    item_count.short_description = "Items"

    def has_add_permission(self, request):
        # Orders are placed through the API so the availability checks run
        return False
