"""
Portal Serializers

A project's content link and password stay hidden until it is paid.
"""

from rest_framework import serializers

from payments.models import Payment
from studio.models import Project


class PortalPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = ['id', 'amount', 'method', 'status', 'transaction_ref', 'confirmed_at']
        read_only_fields = fields


class PortalProjectSerializer(serializers.ModelSerializer):
    is_unlocked = serializers.BooleanField(read_only=True)
    content_link = serializers.SerializerMethodField()
    password = serializers.SerializerMethodField()
    last_payment = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = ['id', 'name', 'price', 'status', 'is_unlocked', 'content_link',
                  'password', 'last_payment', 'created_at']
        read_only_fields = fields

    def get_content_link(self, obj):
        return obj.content_link if obj.is_unlocked else None

    def get_password(self, obj):
        return obj.password if obj.is_unlocked else None

    def get_last_payment(self, obj):
        payment = obj.payments.filter(status=Payment.STATUS_CONFIRMED).order_by('-confirmed_at').first()
        return PortalPaymentSerializer(payment).data if payment else None


class InitiatePaymentSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    method = serializers.ChoiceField(choices=Payment.METHOD_CHOICES)
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True)


class ConfirmPaymentSerializer(serializers.Serializer):
    payment_id = serializers.UUIDField()
