"""Session routes: login, logout and the current-session check."""

import logging
from datetime import datetime
from flask import Blueprint, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from models import db
from db_service import get_db_employee_by_email, load_employee

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/sched/login_request', methods=['POST'])
def login_request():
    """Log an employee in by email and password."""
    data = request.get_json(silent=True) or {}
    email = data.get('email', '').strip()
    password = data.get('password', '')
    remember = data.get('remember', False)

    db_emp = get_db_employee_by_email(email) if email else None

    if db_emp is None or not db_emp.check_password(password):
        logger.info(f"[AUTH] Rejected login for {email!r}")
        return jsonify({
            'success': False,
            'error': 'InvalidLogin',
            'message': 'Invalid email or password.'
        }), 401

    login_user(db_emp, remember=remember)
    db_emp.last_login = datetime.utcnow()
    db.session.commit()

    return jsonify({
        'success': True,
        'employee': load_employee(db_emp).to_dict()
    })


@auth_bp.route('/sched/logout_request', methods=['POST'])
@login_required
def logout_request():
    """Log out the current employee."""
    logout_user()
    return jsonify({'success': True, 'message': 'Logged out.'})


@auth_bp.route('/sched/check_login', methods=['GET', 'POST'])
def check_login():
    """Return the logged-in employee, or 401 when there is no session."""
    if not current_user.is_authenticated:
        return jsonify({'success': False, 'employee': None}), 401

    return jsonify({
        'success': True,
        'employee': load_employee(current_user).to_dict()
    })
