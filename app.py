"""
Shift Calendar - Flask JSON API

Serves the employee, shift and view configuration collections over the
``/sched/...`` endpoints the calendar client talks to:
- get/add/replace/remove for each collection
- a filtered, formatted listing of one calendar day
- login, logout and session check (see auth.py)
"""

import logging
from datetime import date
from types import SimpleNamespace
from flask import Flask, Blueprint, current_app, jsonify, request
from flask_login import LoginManager, current_user

from config import get_config
from models import db, DBEmployee, init_db
from auth import auth_bp
from db_service import employee_store, shift_store, config_store, set_employee_password
from schedcore.day_filter import day_entries, describe_entry
from schedcore.errors import (
    SchedError, NotFound, DuplicateIdentity, MalformedTimestamp, InvalidShiftTimes
)
from schedcore.models import Employee, Shift, ViewConfig
from schedcore.tz import resolve_tz

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)
login_manager = LoginManager()

_ERROR_STATUS = {
    NotFound: 404,
    DuplicateIdentity: 409,
    MalformedTimestamp: 400,
    InvalidShiftTimes: 400,
}

# kind -> (plural, payload decoder)
_ENTITIES = {
    'employee': ('employees', Employee.from_dict),
    'shift': ('shifts', Shift.from_dict),
    'config': ('configs', ViewConfig.from_dict),
}


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(DBEmployee, int(user_id))


def create_app(config_object=None):
    """Build the Flask app, its database and its stores."""
    app = Flask(__name__)
    app.config.from_object(config_object or get_config())

    init_db(app)
    login_manager.init_app(app)

    app.extensions['sched_stores'] = {
        'employee': employee_store(),
        'shift': shift_store(),
        'config': config_store(),
    }
    app.extensions['sched_tz'] = resolve_tz(app.config.get('SCHED_TIMEZONE'))

    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)
    return app


def _store(kind):
    return current_app.extensions['sched_stores'][kind]


def _error_response(error: SchedError):
    status = _ERROR_STATUS.get(type(error), 500)
    body = {
        'success': False,
        'error': error.kind,
        'message': str(error)
    }
    if isinstance(error, (NotFound, DuplicateIdentity)):
        body['entity'] = error.entity
        body['entity_id'] = error.entity_id
    elif isinstance(error, MalformedTimestamp):
        body['value'] = error.value
        body['reason'] = error.reason
    return jsonify(body), status


def _bad_request(message):
    return jsonify({
        'success': False,
        'error': 'BadRequest',
        'message': message
    }), 400


def _decode(kind):
    """Decode the request body into an entity, or return an error response."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, _bad_request('Expected a JSON object')
    try:
        item = _ENTITIES[kind][1](data)
    except SchedError as e:
        return None, _error_response(e)
    except (ValueError, TypeError, KeyError) as e:
        return None, _bad_request(f'Invalid {kind}: {e}')
    if isinstance(item, Shift):
        try:
            item.validate()
        except InvalidShiftTimes as e:
            return None, _error_response(e)
    return item, None


# ==================== COLLECTION API ====================

def _list(kind):
    plural = _ENTITIES[kind][0]
    try:
        items = _store(kind).get()
    except SchedError as e:
        return _error_response(e)
    return jsonify({
        'success': True,
        plural: [i.to_dict() for i in items]
    })


def _add(kind):
    item, error = _decode(kind)
    if error:
        return error
    store = _store(kind)
    try:
        added = store.add(item).last()
    except SchedError as e:
        return _error_response(e)

    if kind == 'employee':
        password = (request.get_json(silent=True) or {}).get('password')
        if password:
            set_employee_password(added.id, password)

    return jsonify({
        'success': True,
        kind: added.to_dict(),
        'message': f'{kind.capitalize()} {added.id} added'
    })


def _replace(kind):
    item, error = _decode(kind)
    if error:
        return error
    try:
        _store(kind).update(item)
    except SchedError as e:
        return _error_response(e)
    return jsonify({
        'success': True,
        kind: item.to_dict(),
        'message': f'{kind.capitalize()} {item.id} updated'
    })


def _remove(kind):
    data = request.get_json(silent=True) or {}
    if data.get('id') is None:
        return _bad_request('Missing id')
    # Removal only needs the identity, the rest of the payload is ignored
    _store(kind).remove(SimpleNamespace(id=data['id']))
    return jsonify({
        'success': True,
        'message': f'{kind.capitalize()} {data["id"]} removed'
    })


@api_bp.route('/sched/get_employees', methods=['GET', 'POST'])
def get_employees():
    return _list('employee')


@api_bp.route('/sched/add_employee', methods=['POST'])
def add_employee():
    """Add an employee. An optional ``password`` field enables login."""
    return _add('employee')


@api_bp.route('/sched/replace_employee', methods=['POST'])
def replace_employee():
    return _replace('employee')


@api_bp.route('/sched/remove_employee', methods=['POST'])
def remove_employee():
    return _remove('employee')


@api_bp.route('/sched/get_shifts', methods=['GET', 'POST'])
def get_shifts():
    return _list('shift')


@api_bp.route('/sched/add_shift', methods=['POST'])
def add_shift():
    """Add a shift. The id is always allocated by the server."""
    return _add('shift')


@api_bp.route('/sched/replace_shift', methods=['POST'])
def replace_shift():
    return _replace('shift')


@api_bp.route('/sched/remove_shift', methods=['POST'])
def remove_shift():
    return _remove('shift')


@api_bp.route('/sched/get_configs', methods=['GET', 'POST'])
def get_configs():
    return _list('config')


@api_bp.route('/sched/add_config', methods=['POST'])
def add_config():
    return _add('config')


@api_bp.route('/sched/replace_config', methods=['POST'])
def replace_config():
    return _replace('config')


@api_bp.route('/sched/remove_config', methods=['POST'])
def remove_config():
    return _remove('config')


# ==================== DAY VIEW API ====================

@api_bp.route('/sched/day', methods=['GET'])
def get_day():
    """
    List the shifts of one day under a view configuration.

    Query parameters: ``date`` (YYYY-MM-DD, required) and ``config_id``
    (defaults to the logged-in employee's active configuration).
    """
    try:
        day = date.fromisoformat(request.args.get('date', ''))
    except ValueError:
        return _bad_request('date must be YYYY-MM-DD')

    config_id = request.args.get('config_id', type=int)
    if config_id is None and current_user.is_authenticated:
        config_id = current_user.active_config
    if config_id is None:
        return _bad_request('config_id is required without an active configuration')

    config = _store('config').find(config_id)
    if config is None:
        return _error_response(NotFound('config', config_id))

    tz = current_app.extensions['sched_tz']
    entries = day_entries(day, _store('shift').get(), _store('employee').get(), config, tz)

    return jsonify({
        'success': True,
        'date': day.isoformat(),
        'config': config.to_dict(),
        'entries': [
            {
                'shift': e.shift.to_dict(),
                'employee': e.employee.to_dict() if e.employee else None,
                'label': describe_entry(e, config, tz)
            }
            for e in entries
        ]
    })


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app = create_app()

    print("\n" + "=" * 60)
    print("   SHIFT CALENDAR")
    print("=" * 60)
    print("\n Starting server at http://localhost:5000\n")

    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
