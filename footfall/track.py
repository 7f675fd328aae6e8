from .identifiers import decode_visitor, decode_session


class Track(object):
    """
    A single page view, or the summary row of a visit.

    The ``duration`` field is only set on the last row of a session. That row
    also carries the number of page views in the session (``view_number``),
    the visitor and the exit url, so it is used to summarize the visit, and
    counting rows with a duration counts visits.

    Tracks are immutable once built; use ``replace()`` to derive a modified
    copy. An unset ``outbound`` is stored as False.
    """
    fields = ('id', 'site_id', 'site_code', 'visitor_id', 'visit_number',
              'previous_session_at', 'session_id', 'view_number',
              'tracked_at', 'duration', 'url', 'page_title', 'referrer',
              'outbound', 'ip_address', 'user_agent', 'campaign_name',
              'campaign_source', 'campaign_medium', 'campaign_content',
              'campaign_term')

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(self.fields)
        if unknown:
            raise TypeError('Unknown track fields: %s' %
                            ', '.join(sorted(unknown)))
        for field in self.fields:
            object.__setattr__(self, field, kwargs.get(field))
        if self.outbound is None:
            object.__setattr__(self, 'outbound', False)

    def __setattr__(self, name, value):
        raise AttributeError('Track objects are immutable')

    def __eq__(self, other):
        if not isinstance(other, Track):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(tuple(getattr(self, field) for field in self.fields))

    def __repr__(self):
        return '<Track site=%r visitor=%r session=%r view=%r at %s>' % (
            self.site_id, self.visitor_id, self.session_id,
            self.view_number, self.tracked_at)

    @classmethod
    def create(cls, visitor=None, session=None, **kwargs):
        """
        Build a track from tracker input.

        :param visitor:
            Compound visitor cookie string; sets ``visitor_id``,
            ``visit_number`` and ``previous_session_at``.
        :type visitor:
            str
        :param session:
            Compound session cookie string; sets ``session_id`` and
            ``view_number``.
        :type session:
            str
        :param kwargs:
            Any other track fields. Decoded cookie values take precedence.
        :raises MalformedIdentifier:
            If either cookie string cannot be decoded.
        """
        vis = decode_visitor(visitor)
        if vis:
            kwargs['visitor_id'] = vis.visitor_id
            if vis.visit_number is not None:
                kwargs['visit_number'] = vis.visit_number
            if vis.previous_session_at is not None:
                kwargs['previous_session_at'] = vis.previous_session_at

        sess = decode_session(session)
        if sess:
            kwargs['session_id'] = sess.session_id
            if sess.view_number is not None:
                kwargs['view_number'] = sess.view_number

        return cls(**kwargs)

    def replace(self, **kwargs):
        values = self.to_dict()
        values.update(kwargs)
        return self.__class__(**values)

    def to_dict(self):
        return {field: getattr(self, field) for field in self.fields}

    @property
    def is_visit(self):
        "True if this is the summary row for a visit."
        return self.duration is not None

    def uniqueness_key(self):
        """
        Return the (site, visitor, session, view) tuple that must be unique
        among stored tracks, or None if the track is not subject to the
        check.
        """
        if self.site_id is None or not self.visitor_id or not self.session_id:
            return None
        return (self.site_id, self.visitor_id, self.session_id,
                self.view_number)
