import django_filters
from django.db.models import Q

from delivery.models import DeliveryLog
from payments.models import Payment
from studio.models import Client, Project


class ClientFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Client
        fields = []

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value) | Q(email__icontains=value) | Q(phone__icontains=value)
        )


class ProjectFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Project.STATUS_CHOICES)
    client = django_filters.UUIDFilter(field_name='client_id')
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Project
        fields = ['status', 'client']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(client__name__icontains=value))


class PaymentFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Payment.STATUS_CHOICES)
    method = django_filters.ChoiceFilter(choices=Payment.METHOD_CHOICES)
    project = django_filters.UUIDFilter(field_name='project_id')

    class Meta:
        model = Payment
        fields = ['status', 'method', 'project']


class DeliveryLogFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=DeliveryLog.STATUS_CHOICES)
    method = django_filters.ChoiceFilter(choices=DeliveryLog.METHOD_CHOICES)
    project = django_filters.UUIDFilter(field_name='project_id')

    class Meta:
        model = DeliveryLog
        fields = ['status', 'method', 'project']
