import time
import logging

from .exc import TrackError


log = logging.getLogger(__name__)


class Worker(object):
    """
    Replays raw tracker events from a log into a store. Events that cannot
    be stored are logged and skipped.
    """

    def __init__(self, log, store, stats_every=500):
        self.log = log
        self.store = store
        self.stats_every = stats_every

        self.last_live_ts = None
        self.last_num_events = None

    def dump_stats(self, num_events, num_rejected):
        live_ts = time.time()
        if self.last_live_ts:
            live_elapsed = live_ts - self.last_live_ts
            rate = ((num_events - self.last_num_events) /
                    float(live_elapsed or 1))
            log.info('Processed %d events, %d rejected, %0.1f /sec',
                     num_events, num_rejected, rate)

        self.last_live_ts = live_ts
        self.last_num_events = num_events

    def run(self):
        """
        Process every event currently in the log.

        :returns:
            Tuple of (number of tracks stored, number of events rejected).
        """
        log.info('Worker started processing.')
        accepted = rejected = 0

        for ii, event in enumerate(self.log.process()):
            try:
                self.store.create(**event)
            except TrackError as e:
                log.warning('Rejected event %r: %s: %s',
                            event, e.__class__.__name__, e)
                rejected += 1
            else:
                accepted += 1
            if (ii % self.stats_every) == 0:
                self.dump_stats(ii, rejected)

        log.info('Worker finished processing: %d stored, %d rejected.',
                 accepted, rejected)
        return accepted, rejected
