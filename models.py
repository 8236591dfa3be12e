"""Database models for employees (and their logins), shifts and view configurations."""

from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from flask_bcrypt import Bcrypt

db = SQLAlchemy()
bcrypt = Bcrypt()


class DBEmployee(db.Model, UserMixin):
    """Persisted employee. Doubles as the login account."""
    __tablename__ = 'employees'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=True)  # NULL = cannot log in

    # Profile
    first = db.Column(db.String(50), nullable=False, default='')
    last = db.Column(db.String(50), nullable=False, default='')
    phone_number = db.Column(db.String(50), nullable=True)

    # 'Read', 'Supervisor' or 'Admin'
    level = db.Column(db.String(20), nullable=False, default='Read')
    default_color = db.Column(db.String(20), nullable=False, default='Blue')

    # ViewConfig currently in use
    active_config = db.Column(db.Integer, nullable=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f'<DBEmployee {self.id}: {self.first} {self.last}>'

    def set_password(self, password):
        """Hash and set the employee's password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if the provided password matches the hash."""
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)


class DBShift(db.Model):
    """
    Persisted shift.

    Start and end are stored as ISO-8601 strings (the wire form) so the
    original UTC offset survives databases without zone-aware columns.
    """
    __tablename__ = 'shifts'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    supervisor_id = db.Column(db.Integer, nullable=False)
    employee_id = db.Column(db.Integer, nullable=True, index=True)  # NULL = unassigned

    start_iso = db.Column(db.String(40), nullable=False)
    end_iso = db.Column(db.String(40), nullable=False)

    # 'NeverRepeat', 'EveryWeek' or 'EveryDay'
    repeat = db.Column(db.String(20), nullable=False, default='NeverRepeat')
    every_x = db.Column(db.Integer, nullable=True)

    note = db.Column(db.Text, nullable=True)
    on_call = db.Column(db.Boolean, default=False)

    def __repr__(self):
        return f'<DBShift {self.id} employee={self.employee_id} {self.start_iso}>'


class DBViewConfig(db.Model):
    """Persisted view configuration."""
    __tablename__ = 'view_configs'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    employee_id = db.Column(db.Integer, nullable=False, index=True)
    config_name = db.Column(db.String(100), nullable=False, default='Default')

    hour_format = db.Column(db.String(10), nullable=False, default='H12')
    last_name_style = db.Column(db.String(10), nullable=False, default='Initial')

    # Visible employee ids, comma-separated, in display order
    view_employees = db.Column(db.Text, default='')

    show_minutes = db.Column(db.Boolean, default=False)
    show_shifts = db.Column(db.Boolean, default=True)
    show_vacations = db.Column(db.Boolean, default=False)
    show_call_shifts = db.Column(db.Boolean, default=False)
    show_disabled = db.Column(db.Boolean, default=False)

    def __repr__(self):
        return f'<DBViewConfig {self.id}: {self.config_name}>'

    def get_view_employees_list(self):
        """Get view_employees as a list of integers."""
        if not self.view_employees:
            return []
        return [int(e) for e in self.view_employees.split(',') if e]

    def set_view_employees_list(self, employee_ids):
        """Set view_employees from a list of integers."""
        self.view_employees = ','.join(str(e) for e in employee_ids)


def init_db(app):
    """Initialize the database with the Flask app and seed fixtures if asked to."""
    db.init_app(app)
    bcrypt.init_app(app)

    with app.app_context():
        db.create_all()

        if app.config.get('SEED_FIXTURES'):
            from db_service import seed_fixtures
            seed_fixtures(app.config.get('SEED_PASSWORD'))
