"""
API error responses.

Every error leaves the API as ``{"success": false, "error": "..."}`` so the
frontend can read one field regardless of which layer raised it.
"""
import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Wrap DRF's default handler and flatten ``detail`` into ``error``."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and 'detail' in data:
        error = str(data['detail'])
        fields = None
    else:
        error = 'Request failed'
        fields = data

    body = {'success': False, 'error': error}
    if fields:
        body['fields'] = fields

    view = context.get('view')
    logger.warning(
        f"{view.__class__.__name__ if view else 'API'} returned {response.status_code}: {error}"
    )
    response.data = body
    return response
