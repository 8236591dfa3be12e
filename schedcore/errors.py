"""Error taxonomy shared by the stores, the editor and the HTTP layer."""


class SchedError(Exception):
    """Base class for all scheduling core errors."""
    kind = 'SchedError'


class NotFound(SchedError):
    """An update or lookup target does not exist."""
    kind = 'NotFound'

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f'{entity} {entity_id} not found')


class DuplicateIdentity(SchedError):
    """A caller-supplied id is already present in the store."""
    kind = 'DuplicateIdentity'

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f'{entity} {entity_id} already exists')


class MalformedTimestamp(SchedError):
    """A wire timestamp could not be parsed into a timezone-aware instant."""
    kind = 'MalformedTimestamp'

    def __init__(self, value, reason: str = 'not an ISO-8601 date-time'):
        self.value = value
        self.reason = reason
        super().__init__(f'Malformed timestamp {value!r}: {reason}')


class DisplayResolutionError(SchedError):
    """A shift references an employee that is not in the employee collection."""
    kind = 'DisplayResolutionError'

    def __init__(self, shift_id, employee_id):
        self.shift_id = shift_id
        self.employee_id = employee_id
        super().__init__(f'Shift {shift_id} references unknown employee {employee_id}')


class InvalidShiftTimes(SchedError):
    """A shift ends before it starts."""
    kind = 'InvalidShiftTimes'

    def __init__(self, shift_id, start, end):
        self.shift_id = shift_id
        super().__init__(f'Shift {shift_id} ends ({end.isoformat()}) before it starts ({start.isoformat()})')


class RemoteError(SchedError):
    """The remote service failed in a way that maps to no other error."""
    kind = 'RemoteError'

    def __init__(self, message: str, status: int = None):
        self.status = status
        super().__init__(message)
