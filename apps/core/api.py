"""
JSON API helpers

Every endpoint under /api/ is a plain function view wrapped in `api_view`:
- unauthenticated requests get 401
- methods not listed get 405
- ApiError becomes {"error": message} with its status
- ProtectedError (FK restrict) becomes 409
- anything else is logged with traceback and becomes 500
"""
import json
import logging
from functools import wraps

from django.db.models import ProtectedError
from django.http import JsonResponse

from .utils import parse_id_list

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error reported to the API client as {"error": message}"""

    def __init__(self, message, status=400, details=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


def error_response(message, status=400, details=None):
    payload = {'error': message}
    if details:
        payload['details'] = details
    return JsonResponse(payload, status=status)


def api_view(methods, errors=None):
    """
    Decorator for JSON endpoints.

    Args:
        methods: allowed HTTP methods
        errors: {method: message} used for unexpected (500) failures
    """
    errors = errors or {}

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return error_response('Authentication required', status=401)

            if request.method not in methods:
                response = error_response(f'Method {request.method} not allowed', status=405)
                response['Allow'] = ', '.join(methods)
                return response

            try:
                return view_func(request, *args, **kwargs)
            except ApiError as e:
                return error_response(e.message, status=e.status, details=e.details)
            except ProtectedError as e:
                blocked = len(e.protected_objects)
                logger.warning(f"Delete blocked by {blocked} referencing row(s): {request.path}")
                return error_response(
                    f'Cannot delete: {blocked} related record(s) still reference it',
                    status=409,
                )
            except Exception as e:
                logger.error(f"API failure {request.method} {request.path}: {e}", exc_info=True)
                return error_response(errors.get(request.method, 'Internal server error'), status=500)

        return wrapper

    return decorator


def parse_json_body(request):
    """Decode the request body as a JSON object."""
    if not request.body:
        raise ApiError('Request body is required')
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ApiError('Invalid JSON body')
    if not isinstance(body, dict):
        raise ApiError('JSON body must be an object')
    return body


def require_keys(body, keys):
    """PUT bodies must carry every key in `keys` with a non-empty value."""
    missing = [key for key in keys if body.get(key) in (None, '')]
    if missing:
        raise ApiError('Missing required fields', details={'missing': missing})


def form_data_from_payload(body, field_map, instance=None):
    """
    Map API keys (original column names) onto form field names.

    Keys missing from the payload fall back to the instance's current
    value, so partial PUT bodies keep optional fields untouched.
    """
    data = {}
    for api_key, form_field in field_map.items():
        if api_key in body:
            data[form_field] = body[api_key]
        elif instance is not None:
            value = getattr(instance, form_field)
            data[form_field] = getattr(value, 'pk', value)
    return data


def validate_payload(form, field_map, messages):
    """
    Run a bound form and raise ApiError on the first invalid field.

    `messages` maps API keys to the error text reported for that key.
    """
    if form.is_valid():
        return form

    for api_key, form_field in field_map.items():
        if form_field in form.errors:
            message = messages.get(api_key, f'Invalid or missing {api_key}')
            raise ApiError(message, details=form.errors.get_json_data())

    # non-field errors
    raise ApiError(form.non_field_errors()[0] if form.non_field_errors() else 'Invalid data',
                   details=form.errors.get_json_data())


def bulk_delete(model, body):
    """
    Shared DELETE handler: {"ids": [...]} → delete those rows.

    400 when ids is missing or empty, 404 when nothing matched.
    ProtectedError propagates to api_view (409).
    """
    ids = body.get('ids')
    if not ids or not isinstance(ids, list):
        raise ApiError('No IDs provided for deletion')

    ids = parse_id_list(ids)
    if not ids:
        raise ApiError('No valid IDs provided for deletion')

    opts = model._meta
    _, per_model = model.objects.filter(pk__in=ids).delete()
    changes = per_model.get(opts.label, 0)

    if changes == 0:
        raise ApiError(f'No {opts.verbose_name_plural} found to delete', status=404)

    logger.info(f"{opts.verbose_name} bulk delete: {changes} row(s) (ids={ids})")
    return JsonResponse({'message': f'{changes} {opts.verbose_name}(s) deleted', 'changes': changes})


def get_or_404(model, pk):
    obj = model.objects.filter(pk=pk).first()
    if obj is None:
        raise ApiError(f'{opts_title(model)} not found', status=404)
    return obj


def opts_title(model):
    return model._meta.verbose_name.capitalize()
