from django.contrib import admin
from payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['project', 'amount', 'method', 'status', 'transaction_ref', 'confirmed_at', 'created_at']
    list_filter = ['method', 'status']
    search_fields = ['project__name', 'project__client__email', 'transaction_ref', 'phone_number']
    readonly_fields = ['id', 'transaction_ref', 'confirmed_at', 'created_at']
