from decimal import Decimal

from rest_framework import serializers

from delivery.models import DeliveryLog
from payments.models import Payment
from studio.models import Client, Project
from studio.services import normalize_email


def _unique_client_email(value, instance=None):
    value = normalize_email(value)
    qs = Client.objects.filter(email__iexact=value)
    if instance is not None:
        qs = qs.exclude(pk=instance.pk)
    if qs.exists():
        raise serializers.ValidationError('A client with this email already exists.')
    return value


class ClientBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'email', 'phone', 'whatsapp']


class ClientSerializer(serializers.ModelSerializer):
    has_portal_access = serializers.BooleanField(read_only=True)
    project_count = serializers.SerializerMethodField()
    portal_password = serializers.CharField(write_only=True, required=False, allow_blank=True, min_length=6)

    class Meta:
        model = Client
        fields = ['id', 'name', 'email', 'phone', 'whatsapp', 'has_portal_access',
                  'project_count', 'portal_password', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'email': {'validators': []},
            'phone': {'required': False, 'allow_blank': True, 'allow_null': True},
            'whatsapp': {'required': False, 'allow_blank': True, 'allow_null': True},
        }

    def validate_email(self, value):
        return _unique_client_email(value, self.instance)

    def get_project_count(self, obj):
        annotated = getattr(obj, 'project_count', None)
        if annotated is not None:
            return annotated
        return obj.projects.count()


class ClientUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['name', 'email', 'phone', 'whatsapp']
        extra_kwargs = {
            'email': {'validators': []},
            'phone': {'allow_blank': True, 'allow_null': True},
            'whatsapp': {'allow_blank': True, 'allow_null': True},
        }

    def validate_email(self, value):
        return _unique_client_email(value, self.instance)


class PortalPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(min_length=6, allow_null=True, required=False)


class PaymentSerializer(serializers.ModelSerializer):
    project_name = serializers.CharField(source='project.name', read_only=True)

    class Meta:
        model = Payment
        fields = ['id', 'project', 'project_name', 'amount', 'method', 'status',
                  'transaction_ref', 'phone_number', 'confirmed_at', 'created_at']
        read_only_fields = fields


class DeliveryLogSerializer(serializers.ModelSerializer):
    project_name = serializers.CharField(source='project.name', read_only=True)
    client_name = serializers.CharField(source='project.client.name', read_only=True)

    class Meta:
        model = DeliveryLog
        fields = ['id', 'project', 'project_name', 'client_name', 'method', 'status',
                  'recipient', 'message', 'sent_at']
        read_only_fields = fields


class ProjectSerializer(serializers.ModelSerializer):
    client = ClientBriefSerializer(read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'name', 'content_link', 'password', 'price', 'status',
                  'client', 'created_at', 'updated_at']
        read_only_fields = fields


class ProjectDetailSerializer(ProjectSerializer):
    payments = PaymentSerializer(many=True, read_only=True)
    delivery_logs = DeliveryLogSerializer(many=True, read_only=True)

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ['payments', 'delivery_logs']
        read_only_fields = fields


class ProjectCreateSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    content_link = serializers.URLField(max_length=500)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))


class ProjectUpdateSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'), required=False)

    class Meta:
        model = Project
        fields = ['name', 'content_link', 'price']


class SimulatePaymentSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    method = serializers.ChoiceField(choices=Payment.METHOD_CHOICES)
