"""
Storage collaborators for tracks.

A store class should implement at least the following methods, where
``track`` is a ``footfall.track.Track`` and ``conditions`` is a list of
``footfall.conditions.Condition`` instances.

    def add(self, track):
        # Insert, checking uniqueness. Return the stored track.
        pass

    def select(self, conditions):
        # Return matching tracks, ordered by tracked_at.
        pass

    def resolve_site(self, code):
        # Return the site id for a tracker code.
        pass

"""
from ..exc import UnknownSite
from ..query import Query
from ..track import Track


class Store(object):

    def create(self, **fields):
        """
        Decode tracker input into a track, resolve its site and store it.

        :param fields:
            Track fields, plus optionally ``visitor`` and ``session`` cookie
            strings. One of ``site_id`` or ``site_code`` must be given.
        :returns:
            The stored track.
        :raises MalformedIdentifier:
            If the cookie strings are badly formed.
        :raises UnknownSite:
            If no site is given, or ``site_code`` does not resolve.
        :raises UniquenessViolation:
            If this view of this session has already been stored.
        """
        track = Track.create(**fields)
        if track.site_id is None:
            if not track.site_code:
                raise UnknownSite('Track has neither site_id nor site_code')
            track = track.replace(site_id=self.resolve_site(track.site_code))
        return self.add(track)

    def query(self):
        return Query(self)
