"""
drf-spectacular preprocessing hooks.
"""

# Back-office and infrastructure routes stay out of the published schema
EXCLUDED_PREFIXES = ('/api/admin/', '/admin/', '/health/')


def preprocess_exclude_admin(endpoints, **kwargs):
    """Publish only the auth and client portal APIs."""
    return [
        (path, path_regex, method, callback)
        for path, path_regex, method, callback in endpoints
        if not path.startswith(EXCLUDED_PREFIXES)
    ]
