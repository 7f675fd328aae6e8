import logging

from . import scopes, registry
from .aggregate import Grouping, distinct, ratio
from . import aggregate


log = logging.getLogger(__name__)


class Query(object):
    """
    A chain of scopes applied to the tracks in a store. Queries are
    generative: every chaining method returns a new query and leaves the
    original untouched, so partial queries can be shared and extended.

        q = store.query().site(1).repeat_visitors().between((start, end))
        q.count()

        store.query().page_views().by('month').all()
    """

    def __init__(self, store, scopes=(), grouping=None):
        self.store = store
        self.scopes = tuple(scopes)
        self.grouping = grouping

    def __repr__(self):
        names = [scope.name for scope in self.scopes
                 if scope is not scopes.grouped]
        if self.grouping:
            names.append('by(%s)' % ', '.join(self.grouping.fields))
        return '<Query %s>' % '.'.join(names)

    def _clone(self, scopes=None, grouping=False):
        if scopes is None:
            scopes = self.scopes
        if grouping is False:
            grouping = self.grouping
        return self.__class__(self.store, scopes, grouping)

    def apply(self, scope):
        return self._clone(scopes=self.scopes + (scope,))

    @property
    def last_scope(self):
        return self.scopes[-1] if self.scopes else None

    def scoped(self):
        return self._clone()

    def page_views(self):
        return self.apply(scopes.page_views)

    def visitors(self):
        return self.apply(scopes.visitors)

    def visits(self):
        return self.apply(scopes.visits)

    def new_visitors(self):
        return self.apply(scopes.new_visitors)

    def repeat_visitors(self):
        return self.apply(scopes.repeat_visitors)

    def repeat_visits(self):
        return self.apply(scopes.repeat_visits)

    def return_visitors(self):
        return self.apply(scopes.return_visitors)

    def return_visits(self):
        return self.apply(scopes.return_visits)

    def entry_pages(self):
        return self.apply(scopes.entry_pages)

    def landing_pages(self):
        return self.apply(scopes.landing_pages)

    def exit_pages(self):
        return self.apply(scopes.exit_pages)

    def duration(self):
        return self.apply(scopes.duration)

    def bounces(self):
        return self.apply(scopes.bounces)

    def opened_emails(self):
        return self.apply(scopes.opened_emails)

    def clicked_emails(self):
        return self.apply(scopes.clicked_emails)

    def campaign(self, name):
        return self.apply(scopes.campaign(name))

    def source(self, src):
        return self.apply(scopes.source(src))

    def medium(self, med):
        return self.apply(scopes.medium(med))

    def site(self, site_id):
        return self.apply(scopes.site(site_id))

    def metric(self, name):
        return self.apply(registry.metric(name))

    def between(self, range, variant=None):
        """
        Restrict to tracks recorded in ``range``, a ``(start, end)`` pair.

        After a repeat scope only previous sessions later than the start are
        counted; after a return scope only previous sessions earlier than the
        start. Pass ``variant`` (one of the ``scopes.Between*`` classes) to
        pick the behavior explicitly instead.
        """
        if variant is None:
            scope = scopes.between(range, after=self.last_scope)
        else:
            scope = variant(range)
        return self.apply(scope)

    def by(self, *fields, **kwargs):
        """
        Group results by the given fields. ``day``, ``month``, ``year`` and
        ``hour`` bucket ``tracked_at``; any other name groups by that track
        field. A single list argument is also accepted. Pass ``tz`` to bucket
        in a local time zone.

        A ``between()`` chained after ``by()`` is always plain, even if a
        repeat or return scope came before the ``by()``.
        """
        if len(fields) == 1 and isinstance(fields[0], (list, tuple)):
            fields = fields[0]
        chain = self.scopes + (scopes.grouped,)
        if not fields:
            return self._clone(scopes=chain)
        return self._clone(scopes=chain,
                           grouping=Grouping(fields, tz=kwargs.get('tz')))

    def conditions(self):
        return [cond for scope in self.scopes for cond in scope.conditions]

    def tracks(self):
        "Tracks matching every scope, before grouping."
        return self.store.select(self.conditions())

    def all(self):
        """
        Materialize the query. Returns tracks, or grouped row dicts if
        ``by()`` was applied.
        """
        log.debug('Running %r', self)
        rows = self.tracks()
        seen = set()
        for scope in self.scopes:
            if scope.group_by and scope.group_by not in seen:
                seen.add(scope.group_by)
                rows = distinct(rows, scope.group_by, self.grouping)
        if self.grouping:
            rows = self.grouping.apply(rows)
        return rows

    def __iter__(self):
        return iter(self.all())

    def count(self):
        return aggregate.count(self.all())

    def _check_field(self, method, field):
        if field == 'count' and self.grouping is None:
            raise ValueError('%s() of count needs a by() query; pass a '
                             'track field instead' % method)

    def sum(self, field='count'):
        self._check_field('sum', field)
        return aggregate.total(self.all(), field)

    def average(self, field='count'):
        self._check_field('average', field)
        return aggregate.average(self.all(), field)

    def rate(self):
        """
        Bounce rate: bounces divided by entry pages, with all other scopes
        of this query applied to both. None if there are no entry pages.
        """
        if scopes.bounces not in self.scopes:
            raise ValueError('rate() needs a bounces() query')
        entries = [scopes.entry_pages if scope == scopes.bounces else scope
                   for scope in self.scopes]
        bounced = self._clone(grouping=None).count()
        entered = self._clone(scopes=entries, grouping=None).count()
        return ratio(bounced, entered)
