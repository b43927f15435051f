"""
Accounts API Views - Login/Logout, Identity, OTP
"""

import logging

from django.conf import settings
from django.contrib.auth import authenticate
from django.contrib.auth.hashers import check_password
from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from accounts.authentication import (
    ROLE_ADMIN, ROLE_CLIENT, SessionIdentity, issue_session_token, revoke_session_token,
)
from accounts.otp_service import issue_otp, verify_otp
from accounts.serializers import LoginSerializer, SendOTPSerializer, VerifyOTPSerializer, IdentitySerializer
from studio.models import Client

logger = logging.getLogger(__name__)


class OTPThrottle(AnonRateThrottle):
    scope = 'otp'


def _check_client_credentials(identifier, password):
    client = Client.objects.filter(
        Q(email__iexact=identifier) | Q(phone=identifier),
        password__isnull=False,
    ).first()
    if client and check_password(password, client.password):
        return client
    return None


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Exchange email/phone + password for a session token.
    Studio admins are checked first, then portal clients.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    identifier = serializer.validated_data['identifier'].strip()
    password = serializer.validated_data['password']

    principal, role = None, None
    user = authenticate(request, email=identifier, password=password)
    if user is not None:
        principal, role = user, ROLE_ADMIN
    else:
        client = _check_client_credentials(identifier, password)
        if client is not None:
            principal, role = client, ROLE_CLIENT

    if principal is None:
        logger.info(f'Login failed for {identifier[:3]}***')
        return Response({'error': 'Invalid credentials'}, status=status.HTTP_401_UNAUTHORIZED)

    token = issue_session_token(principal, role)
    logger.info(f'Login succeeded: role={role} id={principal.id}')
    return Response({
        'access_token': token,
        'token_type': 'Bearer',
        'expires_in': settings.SESSION_TOKEN_LIFETIME_HOURS * 3600,
        'user': IdentitySerializer(SessionIdentity(principal, role)).data,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    revoke_session_token(request.user)
    return Response({'success': True, 'message': 'Logged out'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(IdentitySerializer(request.user).data)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OTPThrottle])
def send_otp(request):
    """
    Issue a one-time code for an email or phone.
    Body: {"email": "...", "phone": "...", "type": "login"}
    """
    serializer = SendOTPSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    otp = issue_otp(email=data.get('email'), phone=data.get('phone'), purpose=data.get('type'))

    body = {'success': True, 'message': 'OTP sent successfully', 'expires_at': otp.expires_at}
    if settings.DEMO_MODE:
        body['otp'] = otp.code
    return Response(body, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([AllowAny])
def verify_otp_view(request):
    serializer = VerifyOTPSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    verify_otp(data['code'], email=data.get('email'), phone=data.get('phone'))
    return Response({'success': True, 'message': 'OTP verified successfully'})
