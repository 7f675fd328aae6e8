"""
Grouping of tracks into time buckets or by field value, and the aggregate
functions that run over grouped (or plain) results.
"""

from collections import OrderedDict

import pytz


DAY = 'day'
MONTH = 'month'
YEAR = 'year'
HOUR = 'hour'

temporal_fields = (DAY, MONTH, YEAR, HOUR)


def bucket_start(dt, granularity, tz=None):
    """
    Truncate a datetime to the start of the bucket containing it.

    :param dt:
        Naive UTC datetime.
    :type dt:
        datetime
    :param granularity:
        One of ``'hour'``, ``'day'``, ``'month'`` or ``'year'``.
    :type granularity:
        str
    :param tz:
        Time zone to bucket in. The returned datetime is naive local time in
        this zone.
    :type tz:
        pytz timezone or None
    :returns:
        Start of the bucket.
    :rtype:
        datetime
    """
    if granularity not in temporal_fields:
        raise ValueError('invalid granularity: %r' % granularity)
    if tz is not None:
        dt = dt.replace(tzinfo=pytz.utc).astimezone(tz).replace(tzinfo=None)

    dt = dt.replace(minute=0, second=0, microsecond=0)
    if granularity == HOUR:
        return dt
    dt = dt.replace(hour=0)
    if granularity == DAY:
        return dt
    dt = dt.replace(day=1)
    if granularity == MONTH:
        return dt
    return dt.replace(month=1)


class Grouping(object):
    """
    Projection of tracks into grouped rows. Each row is a dict keyed by the
    grouped fields, with a ``count`` of the tracks in the group. Temporal
    fields (day, month, year, hour) are output under ``tracked_at`` as the
    start of the bucket.
    """

    def __init__(self, fields, tz=None):
        if not fields:
            raise ValueError('Grouping needs at least one field')
        self.fields = tuple(fields)
        self.tz = pytz.timezone(tz) if isinstance(tz, str) else tz

    def __repr__(self):
        return '<Grouping %s>' % ', '.join(self.fields)

    def column(self, field):
        return 'tracked_at' if field in temporal_fields else field

    def value(self, track, field):
        if field in temporal_fields:
            if track.tracked_at is None:
                return None
            return bucket_start(track.tracked_at, field, self.tz)
        return getattr(track, field)

    def key(self, track):
        return tuple(self.value(track, field) for field in self.fields)

    def apply(self, tracks):
        groups = OrderedDict()
        for track in tracks:
            key = self.key(track)
            row = groups.get(key)
            if row is None:
                row = groups[key] = {}
                for field, value in zip(self.fields, key):
                    row[self.column(field)] = value
                row['count'] = 0
            row['count'] += 1
        return list(groups.values())


def distinct(tracks, field, grouping=None):
    """
    Keep the first track for each value of ``field``, or for each value of
    ``field`` within each group if a grouping is given.
    """
    seen = set()
    ret = []
    for track in tracks:
        key = getattr(track, field)
        if grouping is not None:
            key = (key,) + grouping.key(track)
        if key not in seen:
            seen.add(key)
            ret.append(track)
    return ret


def value_of(row, field):
    if isinstance(row, dict):
        return row[field]
    return getattr(row, field)


def ratio(numerator, denominator):
    """
    True division, or None when the denominator is zero.
    """
    if not denominator:
        return None
    return numerator / float(denominator)


def count(rows):
    return len(rows)


def total(rows, field='count'):
    values = [value_of(row, field) for row in rows]
    return sum(v for v in values if v is not None)


def average(rows, field='count'):
    """
    Mean of ``field`` over ``rows``. Missing values are skipped; if there
    are none left the result is None.
    """
    values = [value_of(row, field) for row in rows]
    values = [v for v in values if v is not None]
    return ratio(sum(values), len(values))
