# election/routes/__init__.py

# HTTP layer: thin blueprints over the services. Responses always use the
# {success, data, meta?, message?} envelope.

from flask import jsonify, request
from werkzeug.routing import IntegerConverter

from election.database.pagination import DEFAULT_LIMIT, PageParams
from election.errors import ValidationError
from election.security.input_validator import MAX_INTEGER


class IdConverter(IntegerConverter):
    """``<id:name>`` matches only positive ids that fit an INTEGER column."""

    def __init__(self, url_map):
        super().__init__(url_map, min=1, max=MAX_INTEGER)


def _positive_int_arg(name, default):
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if 0 < value <= MAX_INTEGER else default


def page_params(default_limit=DEFAULT_LIMIT):
    return PageParams(page=_positive_int_arg('page', 1), limit=_positive_int_arg('limit', default_limit))


def optional_int_arg(name):
    try:
        value = int(request.args[name])
    except (KeyError, TypeError, ValueError):
        return None
    if abs(value) > MAX_INTEGER:
        raise ValidationError(f"{name} is out of range")
    return value


def json_body():
    return request.get_json(silent=True)


def success(data=None, meta=None, message=None, status=200):
    body = {'success': True, 'data': data}
    if meta is not None:
        body['meta'] = meta
    if message is not None:
        body['message'] = message
    return jsonify(body), status


def paginated(result, serialize):
    return success([serialize(item) for item in result.items], meta=result.meta())
