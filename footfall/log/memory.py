import logging

from collections import deque

log = logging.getLogger(__name__)


class MemoryLog(object):
    """
    An in-memory queue of raw tracker events, each a dict of keyword
    arguments for ``Store.create()``.

    Events are removed one at a time as they are played back, so if
    processing stops partway the unprocessed events stay queued.
    """
    def __init__(self, events=()):
        self.q = deque(events)

    def __len__(self):
        return len(self.q)

    def write(self, *events):
        log.debug('Queueing %d events', len(events))
        self.q.extend(events)

    def process(self):
        log.info('Playing back %d queued events.', len(self.q))
        while self.q:
            event = self.q.popleft()
            log.debug('Playing event: %r', event)
            yield event

    def purge(self):
        log.info('Dropping %d queued events.', len(self.q))
        self.q.clear()
