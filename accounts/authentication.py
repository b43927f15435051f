"""
Session-token authentication for ShutterDesk.

One signed token format serves both studio admins and portal clients; the
`role` claim says which table `sub` points into.
"""

import jwt
import uuid
import logging
from datetime import datetime, timedelta, timezone

from django.conf import settings
from django.core.cache import cache
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)

ROLE_ADMIN = 'admin'
ROLE_CLIENT = 'client'
ROLES = (ROLE_ADMIN, ROLE_CLIENT)

_REVOKED_KEY = 'revoked-session:{jti}'


class SessionIdentity:
    """
    Verified identity for one request: who is calling and in which role.

    `principal` is the StudioUser for admins and the studio Client for clients.
    """

    is_authenticated = True
    is_anonymous = False

    def __init__(self, principal, role, token_id=None, expires_at=None):
        self.principal = principal
        self.role = role
        self.token_id = token_id
        self.expires_at = expires_at

    @property
    def id(self):
        return self.principal.id

    @property
    def pk(self):
        return self.principal.pk

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def is_client(self):
        return self.role == ROLE_CLIENT

    @property
    def client(self):
        return self.principal if self.is_client else None

    def __str__(self):
        return f'{self.role}:{self.principal.email}'


def _load_principal(role, principal_id):
    if role == ROLE_ADMIN:
        from accounts.models import StudioUser
        return StudioUser.objects.filter(id=principal_id, is_active=True).first()
    from studio.models import Client
    return Client.objects.filter(id=principal_id, password__isnull=False).first()


class SessionTokenAuthentication(BaseAuthentication):
    def authenticate_header(self, request):
        return 'Bearer'

    def authenticate(self, request):
        auth_header = request.headers.get('Authorization', '')

        if not auth_header.startswith('Bearer '):
            return None

        token = auth_header[7:]
        payload = decode_session_token(token)

        principal = _load_principal(payload['role'], payload['sub'])
        if principal is None:
            raise AuthenticationFailed('Account not found')

        expires_at = datetime.fromtimestamp(payload['exp'], tz=timezone.utc)
        identity = SessionIdentity(principal, payload['role'], token_id=payload['jti'], expires_at=expires_at)
        return (identity, payload)


def issue_session_token(principal, role):
    if role not in ROLES:
        raise ValueError(f'Unknown role: {role}')
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(principal.id),
        'role': role,
        'jti': uuid.uuid4().hex,
        'iat': now,
        'exp': now + timedelta(hours=settings.SESSION_TOKEN_LIFETIME_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm='HS256')


def decode_session_token(token):
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=['HS256'],
            options={'require': ['sub', 'role', 'jti', 'exp']},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationFailed('Token has expired')
    except jwt.InvalidTokenError:
        raise AuthenticationFailed('Invalid token')

    if payload['role'] not in ROLES:
        raise AuthenticationFailed('Invalid token')
    if cache.get(_REVOKED_KEY.format(jti=payload['jti'])):
        raise AuthenticationFailed('Token has been revoked')
    return payload


def revoke_session_token(identity):
    """Remember the token id until its natural expiry so it stops authenticating."""
    remaining = int((identity.expires_at - datetime.now(timezone.utc)).total_seconds())
    if remaining > 0:
        cache.set(_REVOKED_KEY.format(jti=identity.token_id), True, timeout=remaining)
    logger.info(f'Session revoked for {identity}')
