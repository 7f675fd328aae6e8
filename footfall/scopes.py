"""
Named scopes over tracks. A scope is a set of conditions which are all
required to hold, plus optionally a field that rows are made distinct by
(e.g. one row per visitor). Applying several scopes to a query intersects
them.
"""

from .conditions import Present, Equals, Between, gt, lt, match_all


REPEAT = 'repeat'
RETURN = 'return'


class Scope(object):

    def __init__(self, name, conditions=(), group_by=None, recency=None):
        """
        :param name:
            Registry name of the scope.
        :param conditions:
            Conditions that must all match.
        :param group_by:
            Field to make matching rows distinct on, if any.
        :param recency:
            ``REPEAT`` or ``RETURN`` if this scope selects repeat or return
            visits; a following ``between()`` uses it to constrain the
            previous session time.
        """
        self.name = name
        self.conditions = tuple(conditions)
        self.group_by = group_by
        self.recency = recency

    def __repr__(self):
        return '<Scope %s %r>' % (self.name, list(self.conditions))

    def __eq__(self, other):
        if not isinstance(other, Scope):
            return NotImplemented
        return ((self.name, self.conditions, self.group_by, self.recency) ==
                (other.name, other.conditions, other.group_by, other.recency))

    def __hash__(self):
        return hash((self.name, self.conditions))

    def matches(self, track):
        return match_all(self.conditions, track)


scoped = Scope('scoped')

page_views = Scope('page_views', [Equals('outbound', False),
                                  Present('url')])

visitors = Scope('visitors', [Present('visitor_id')], group_by='visitor_id')

visits = Scope('visits', [Present('duration')])

# Visitors whose first visit was during the period.
new_visitors = Scope('new_visitors', [Equals('visit_number', 1),
                                      Present('duration')])

# Visitors who visited more than once in the period. Only meaningful when
# followed by between().
repeat_visitors = Scope('repeat_visitors',
                        [Present('previous_session_at'),
                         Present('duration')],
                        group_by='visitor_id', recency=REPEAT)

repeat_visits = Scope('repeat_visits',
                      [Present('previous_session_at'),
                       Present('duration')],
                      recency=REPEAT)

# Visitors who visited before the period and have come back.
return_visitors = Scope('return_visitors',
                        [gt('visit_number', 1),
                         Present('previous_session_at'),
                         Present('duration')],
                        group_by='visitor_id', recency=RETURN)

return_visits = Scope('return_visits',
                      [gt('visit_number', 1),
                       Present('previous_session_at'),
                       Present('duration')],
                      recency=RETURN)

entry_pages = Scope('entry_pages', [Equals('view_number', 1),
                                    Present('url')])

landing_pages = Scope('landing_pages', [Equals('view_number', 1),
                                        Present('url'),
                                        Present('campaign_name')])

exit_pages = Scope('exit_pages', [Present('duration')])

duration = Scope('duration', [Present('duration')])

bounces = Scope('bounces', [Present('duration'),
                            Equals('view_number', 1)])

opened_emails = Scope('opened_emails', [Present('campaign_name'),
                                        Equals('campaign_medium', 'email'),
                                        Equals('campaign_source', 'open')])

clicked_emails = Scope('clicked_emails', [Present('campaign_name'),
                                          Equals('campaign_medium', 'email'),
                                          Equals('campaign_source',
                                                 'landing')])


def campaign(name):
    return Scope('campaign', [Equals('campaign_name', name)])


def source(src):
    return Scope('source', [Equals('campaign_source', src)])


def medium(med):
    return Scope('medium', [Equals('campaign_medium', med)])


def site(site_id):
    return Scope('site', [Equals('site_id', site_id)])


class BetweenPlain(Scope):
    """
    Tracks recorded within ``(start, end)``, inclusive. A range of None
    matches everything.
    """

    def __init__(self, range):
        self.range = range
        conditions = []
        if range is not None:
            start, end = range
            conditions.append(Between('tracked_at', start, end))
            conditions.extend(self.extra_conditions(start))
        Scope.__init__(self, 'between', conditions)

    def extra_conditions(self, start):
        return []


class BetweenAfterRepeat(BetweenPlain):
    "Repeat visits in range: the previous session is also after the start."

    def extra_conditions(self, start):
        return [gt('previous_session_at', start)]


class BetweenAfterReturn(BetweenPlain):
    "Return visits in range: the previous session predates the start."

    def extra_conditions(self, start):
        return [lt('previous_session_at', start)]


between_variants = {
    None: BetweenPlain,
    REPEAT: BetweenAfterRepeat,
    RETURN: BetweenAfterReturn,
}


def between(range, after=None):
    """
    Build a date range scope, picking the variant that fits the scope it is
    chained after.

    :param range:
        ``(start, end)`` pair of naive UTC datetimes, or None.
    :param after:
        The scope immediately preceding this one in the chain, if any.
    :type after:
        Scope
    """
    recency = after.recency if after is not None else None
    return between_variants[recency](range)


# Marks where by() was applied in a query chain. Has no conditions, and a
# between() chained after it is always plain.
grouped = Scope('by')
