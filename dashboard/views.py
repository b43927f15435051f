import logging
from decimal import Decimal

from django.db.models import Count, Sum
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from dashboard.filters import ClientFilter, DeliveryLogFilter, PaymentFilter, ProjectFilter
from dashboard.permissions import IsStudioAdmin
from dashboard.serializers import (
    ClientSerializer, ClientUpdateSerializer, PortalPasswordSerializer,
    ProjectSerializer, ProjectDetailSerializer, ProjectCreateSerializer, ProjectUpdateSerializer,
    PaymentSerializer, DeliveryLogSerializer, SimulatePaymentSerializer,
)
from delivery.models import DeliveryLog
from delivery.services import redeliver
from payments.models import Payment
from payments.services import simulate_payment
from studio.models import Client, Project
from studio.services import create_client, create_project, set_portal_password

logger = logging.getLogger(__name__)

PER_PAGE = 25


def _filtered(filterset_class, request, queryset):
    filterset = filterset_class(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        raise ValidationError(filterset.errors)
    return filterset.qs


def _paginate(request, qs, serializer_class):
    try:
        page = max(int(request.query_params.get('page', 1)), 1)
    except ValueError:
        raise ValidationError({'page': ['Page must be a number']})
    total = qs.count()
    items = qs[(page - 1) * PER_PAGE:page * PER_PAGE]

    return Response({
        'results': serializer_class(items, many=True).data,
        'count': total,
        'next': f'?page={page + 1}' if page * PER_PAGE < total else None,
        'previous': f'?page={page - 1}' if page > 1 else None,
    })


def _get_or_none(model, pk):
    try:
        return model.objects.get(pk=pk)
    except model.DoesNotExist:
        return None


# ==================== DASHBOARD ====================

@api_view(['GET'])
@permission_classes([IsStudioAdmin])
def dashboard_stats(request):
    total_revenue = Payment.objects.filter(
        status=Payment.STATUS_CONFIRMED
    ).aggregate(s=Sum('amount'))['s'] or Decimal('0')

    recent_projects = Project.objects.select_related('client').order_by('-created_at')[:5]
    recent_deliveries = DeliveryLog.objects.select_related('project__client').order_by('-sent_at')[:5]

    pending_value = Project.objects.filter(
        status=Project.STATUS_PENDING
    ).aggregate(s=Sum('price'))['s'] or Decimal('0')

    return Response({
        'total_projects': Project.objects.count(),
        'pending_payments': Project.objects.filter(status=Project.STATUS_PENDING).count(),
        'paid_projects': Project.objects.filter(status=Project.STATUS_PAID).count(),
        'delivered_projects': Project.objects.filter(status=Project.STATUS_DELIVERED).count(),
        'total_clients': Client.objects.count(),
        'total_revenue': str(total_revenue),
        'pending_value': str(pending_value),
        'recent_projects': ProjectSerializer(recent_projects, many=True).data,
        'recent_deliveries': DeliveryLogSerializer(recent_deliveries, many=True).data,
    })


# ==================== CLIENTS ====================

@api_view(['GET', 'POST'])
@permission_classes([IsStudioAdmin])
def client_list(request):
    if request.method == 'POST':
        ser = ClientSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        client = create_client(
            name=data['name'],
            email=data['email'],
            phone=data.get('phone'),
            whatsapp=data.get('whatsapp'),
            portal_password=data.get('portal_password'),
        )
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    qs = Client.objects.annotate(project_count=Count('projects')).order_by('-created_at')
    return _paginate(request, _filtered(ClientFilter, request, qs), ClientSerializer)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsStudioAdmin])
def client_detail(request, client_id):
    client = _get_or_none(Client, client_id)
    if client is None:
        return Response({'error': 'Client not found'}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'DELETE':
        if client.projects.exists():
            return Response(
                {'error': 'Client still has projects; delete them first'},
                status=status.HTTP_409_CONFLICT,
            )
        client.delete()
        logger.info(f'Client {client_id} deleted by {request.user}')
        return Response(status=status.HTTP_204_NO_CONTENT)

    if request.method == 'PATCH':
        ser = ClientUpdateSerializer(client, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        for field in ('phone', 'whatsapp'):
            if field in ser.validated_data and not ser.validated_data[field]:
                ser.validated_data[field] = None
        ser.save()

    return Response(ClientSerializer(client).data)


@api_view(['POST'])
@permission_classes([IsStudioAdmin])
def client_portal_password(request, client_id):
    """Set or clear (password=null) a client's portal login."""
    client = _get_or_none(Client, client_id)
    if client is None:
        return Response({'error': 'Client not found'}, status=status.HTTP_404_NOT_FOUND)

    ser = PortalPasswordSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    set_portal_password(client, ser.validated_data.get('password'))
    return Response(ClientSerializer(client).data)


# ==================== PROJECTS ====================

@api_view(['GET', 'POST'])
@permission_classes([IsStudioAdmin])
def project_list(request):
    if request.method == 'POST':
        ser = ProjectCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        client = _get_or_none(Client, data['client_id'])
        if client is None:
            return Response({'error': 'Client not found'}, status=status.HTTP_404_NOT_FOUND)

        project = create_project(
            client=client,
            name=data['name'],
            content_link=data['content_link'],
            price=data['price'],
        )
        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)

    qs = Project.objects.select_related('client').order_by('-created_at')
    return _paginate(request, _filtered(ProjectFilter, request, qs), ProjectSerializer)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsStudioAdmin])
def project_detail(request, project_id):
    project = _get_or_none(Project, project_id)
    if project is None:
        return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'DELETE':
        project.delete()
        logger.info(f'Project {project_id} deleted by {request.user}')
        return Response(status=status.HTTP_204_NO_CONTENT)

    if request.method == 'PATCH':
        ser = ProjectUpdateSerializer(project, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        if 'price' in ser.validated_data and project.status != Project.STATUS_PENDING:
            return Response(
                {'error': 'Price cannot change after payment'},
                status=status.HTTP_409_CONFLICT,
            )
        ser.save()

    return Response(ProjectDetailSerializer(project).data)


@api_view(['POST'])
@permission_classes([IsStudioAdmin])
def project_deliver(request, project_id):
    """Send (or re-send) the unlock password for a paid project."""
    try:
        project, logs = redeliver(project_id)
    except Project.DoesNotExist:
        return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)

    return Response({
        'success': True,
        'project': ProjectSerializer(project).data,
        'delivery_logs': DeliveryLogSerializer(logs, many=True).data,
    })


# ==================== PAYMENTS ====================

@api_view(['POST'])
@permission_classes([IsStudioAdmin])
def payment_simulate(request):
    """Admin quick-simulate: confirm a pending project's payment and deliver its password."""
    ser = SimulatePaymentSerializer(data=request.data)
    ser.is_valid(raise_exception=True)

    project = _get_or_none(Project, ser.validated_data['project_id'])
    if project is None:
        return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)

    payment = simulate_payment(project, ser.validated_data['method'])
    project.refresh_from_db()
    logger.info(f'Payment simulated for project {project.id} by {request.user}')

    return Response({
        'success': True,
        'message': 'Payment confirmed and password delivered',
        'payment': PaymentSerializer(payment).data,
        'project': ProjectSerializer(project).data,
    })


@api_view(['GET'])
@permission_classes([IsStudioAdmin])
def payment_list(request):
    qs = Payment.objects.select_related('project').order_by('-created_at')
    return _paginate(request, _filtered(PaymentFilter, request, qs), PaymentSerializer)


# ==================== DELIVERY LOGS ====================

@api_view(['GET'])
@permission_classes([IsStudioAdmin])
def delivery_log_list(request):
    qs = DeliveryLog.objects.select_related('project__client').order_by('-sent_at')
    return _paginate(request, _filtered(DeliveryLogFilter, request, qs), DeliveryLogSerializer)
