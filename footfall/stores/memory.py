import logging
from datetime import datetime

from ..conditions import match_all
from ..exc import UniquenessViolation, UnknownSite
from . import Store


log = logging.getLogger(__name__)


def ordering(track):
    return (track.tracked_at is None, track.tracked_at or datetime.min)


class MemoryStore(Store):
    """
    Keeps tracks in a list. Useful for tests and for computing metrics over
    small batches of tracks that are already in memory.
    """

    def __init__(self, tracks=()):
        self._tracks = []
        self._keys = set()
        self._sites = {}
        self._next_id = 1
        for track in tracks:
            self.add(track)

    def __len__(self):
        return len(self._tracks)

    def add_site(self, tracker, site_id=None):
        if site_id is None:
            site_id = max(self._sites.values(), default=0) + 1
        self._sites[tracker] = site_id
        return site_id

    def resolve_site(self, code):
        try:
            return self._sites[code]
        except KeyError:
            raise UnknownSite('No site with tracker code %r' % code)

    def add(self, track):
        key = track.uniqueness_key()
        if key is not None:
            if key in self._keys:
                raise UniquenessViolation('Duplicate view: %r' % (key,))
            self._keys.add(key)
        if track.id is None:
            track = track.replace(id=self._next_id)
        self._next_id = max(self._next_id, track.id) + 1
        log.debug('Adding %r', track)
        self._tracks.append(track)
        return track

    def select(self, conditions):
        return sorted((track for track in self._tracks
                       if match_all(conditions, track)),
                      key=ordering)
