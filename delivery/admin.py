from django.contrib import admin
from delivery.models import DeliveryLog


@admin.register(DeliveryLog)
class DeliveryLogAdmin(admin.ModelAdmin):
    list_display = ['project', 'method', 'status', 'recipient', 'sent_at']
    list_filter = ['method', 'status']
    search_fields = ['project__name', 'recipient']
    readonly_fields = ['id', 'project', 'method', 'status', 'recipient', 'message', 'sent_at']
