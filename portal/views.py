"""
Client Portal API Views

Every call runs as the session's client; projects and payments of other
clients are refused with 403, unknown ids with 404.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from payments.models import Payment
from payments.services import confirm_checkout, initiate_payment
from portal.permissions import IsPortalClient, IsProjectOwner
from portal.serializers import (
    ConfirmPaymentSerializer, InitiatePaymentSerializer, PortalPaymentSerializer, PortalProjectSerializer,
)
from studio.models import Project

logger = logging.getLogger(__name__)


def _check_owner(request, obj):
    permission = IsProjectOwner()
    if not permission.has_object_permission(request, None, obj):
        logger.warning(f'Ownership check failed: {request.user} on {obj.__class__.__name__} {obj.pk}')
        raise PermissionDenied(permission.message)


@api_view(['GET'])
@permission_classes([IsPortalClient])
def project_list(request):
    projects = Project.objects.filter(client=request.user.client).order_by('-created_at')
    data = PortalProjectSerializer(projects, many=True).data
    return Response({
        'projects': data,
        'summary': {
            'total': len(data),
            'unlocked': sum(1 for p in data if p['is_unlocked']),
            'pending': sum(1 for p in data if p['status'] == Project.STATUS_PENDING),
        },
    })


@api_view(['POST'])
@permission_classes([IsPortalClient])
def initiate_payment_view(request):
    """
    Start checkout for one of the caller's projects.
    Body: {"project_id": "...", "method": "mpesa", "phone_number": "0712345678"}
    """
    ser = InitiatePaymentSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data

    project = Project.objects.filter(pk=data['project_id']).first()
    if project is None:
        return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)
    _check_owner(request, project)

    payment = initiate_payment(project, data['method'], phone_number=data.get('phone_number'))
    return Response({
        'success': True,
        'payment_id': str(payment.id),
        'amount': str(payment.amount),
        'message': 'Payment initiated successfully',
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsPortalClient])
def confirm_payment_view(request):
    """
    Complete checkout. Simulates gateway latency, then confirms the payment
    and delivers the project password.
    """
    ser = ConfirmPaymentSerializer(data=request.data)
    ser.is_valid(raise_exception=True)

    payment = Payment.objects.select_related('project').filter(pk=ser.validated_data['payment_id']).first()
    if payment is None:
        return Response({'error': 'Payment not found'}, status=status.HTTP_404_NOT_FOUND)
    _check_owner(request, payment)

    payment = confirm_checkout(payment)
    project = Project.objects.get(pk=payment.project_id)
    logger.info(f'Checkout completed for project {project.id} by {request.user}')

    return Response({
        'success': True,
        'message': 'Payment confirmed successfully',
        'payment': PortalPaymentSerializer(payment).data,
        'project': PortalProjectSerializer(project).data,
    })
