"""
Host-based admin access restriction for the Django admin site.
"""

import logging

from django.conf import settings
from django.http import HttpResponseRedirect

logger = logging.getLogger(__name__)

ADMIN_PATH_PREFIX = '/admin/'


def _request_host(request):
    return request.get_host().split(':')[0]


class AdminHostRestrictionMiddleware:
    """
    Serve /admin/ only on settings.ADMIN_DOMAIN; other hosts get sent to '/'.
    An empty ADMIN_DOMAIN leaves the admin site reachable from any allowed host.
    The JSON admin API under /api/admin/ is guarded by session tokens instead.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        admin_domain = settings.ADMIN_DOMAIN
        if admin_domain and request.path.startswith(ADMIN_PATH_PREFIX):
            host = _request_host(request)
            if host != admin_domain:
                logger.warning(f'Admin site request on {host} redirected (expected {admin_domain})')
                return HttpResponseRedirect('/')
        return self.get_response(request)
