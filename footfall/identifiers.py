"""
Decoding of the compound visitor and session strings written by the
JavaScript tracker into its cookies. Both are dot-separated:

    visitor: <visitor id>.<visit number>.<current session ts>.<previous ts>
    session: <session id>.<view number>

Trailing parts are optional.
"""

from collections import namedtuple
from datetime import datetime, timedelta

from .exc import MalformedIdentifier


sep = '.'

epoch = datetime(1970, 1, 1)

# Timestamps with more digits than this are in milliseconds.
max_seconds_digits = 10


VisitorId = namedtuple('VisitorId', ['visitor_id', 'visit_number',
                                     'current_session_at',
                                     'previous_session_at'])

SessionId = namedtuple('SessionId', ['session_id', 'view_number'])


def to_time(raw):
    """
    Convert a tracker timestamp into a naive UTC datetime.

    :param raw:
        Decimal digits, either seconds or milliseconds since the epoch.
    :type raw:
        string
    :returns:
        The corresponding datetime, or None if ``raw`` is empty.
    :rtype:
        datetime or None
    """
    if not raw:
        return None
    if not (raw.isascii() and raw.isdigit()):
        raise MalformedIdentifier('Bad timestamp: %r' % raw)
    seconds = int(raw)
    if len(raw) > max_seconds_digits:
        seconds //= 1000
    try:
        return epoch + timedelta(seconds=seconds)
    except OverflowError:
        raise MalformedIdentifier('Timestamp out of range: %r' % raw)


def from_time(dt):
    "Inverse of ``to_time()``, always producing seconds."
    if dt is None:
        return ''
    return str(int((dt - epoch).total_seconds()))


def _to_int(raw, what, s):
    if not raw:
        return None
    if not raw.isascii():
        raise MalformedIdentifier('Bad %s in %r' % (what, s))
    try:
        return int(raw)
    except ValueError:
        raise MalformedIdentifier('Bad %s in %r' % (what, s))


def decode_visitor(s):
    """
    Decode a visitor cookie string.

    :param s:
        Raw visitor string, with up to four parts: visitor id, number of
        visits, current session timestamp, previous session timestamp.
    :type s:
        string
    :returns:
        Decoded parts, or None if ``s`` is empty.
    :rtype:
        VisitorId or None
    :raises MalformedIdentifier:
        If there are more than four parts, or a part is not numeric where a
        number is expected.
    """
    if not s:
        return None
    parts = s.split(sep)
    if len(parts) > 4:
        raise MalformedIdentifier('Badly formed visitor: %r' % s)
    parts += [''] * (4 - len(parts))
    return VisitorId(visitor_id=parts[0],
                     visit_number=_to_int(parts[1], 'visit number', s),
                     current_session_at=to_time(parts[2]),
                     previous_session_at=to_time(parts[3]))


def decode_session(s):
    """
    Decode a session cookie string into session id and view number.

    Some old tracker versions wrote a three part session cookie; for those
    the middle part is dropped and the last part is the view number.
    """
    if not s:
        return None
    parts = s.split(sep)
    if len(parts) > 3:
        raise MalformedIdentifier('Badly formed session: %r' % s)
    if len(parts) == 3:
        del parts[1]
    parts += [''] * (2 - len(parts))
    return SessionId(session_id=parts[0],
                     view_number=_to_int(parts[1], 'view number', s))


def _join(parts):
    while parts and not parts[-1]:
        parts.pop()
    return sep.join(parts)


def encode_visitor(visitor_id, visit_number=None, current_session_at=None,
                   previous_session_at=None):
    return _join([visitor_id,
                  '' if visit_number is None else str(visit_number),
                  from_time(current_session_at),
                  from_time(previous_session_at)])


def encode_session(session_id, view_number=None):
    return _join([session_id,
                  '' if view_number is None else str(view_number)])
