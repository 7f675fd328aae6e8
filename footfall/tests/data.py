from datetime import datetime

from footfall.identifiers import encode_visitor, encode_session

from .base import work_path


site_code = 'cheese'
site_id = 1

other_site_code = 'wine'
other_site_id = 2


window = (datetime(2009, 1, 10), datetime(2009, 1, 20, 23, 59, 59))


def event(vid, visit, prev, sid, view, at, duration=None, url='/',
          site=site_code, **kw):
    return dict(site_code=site,
                visitor=encode_visitor(vid, visit, at, prev),
                session=encode_session(sid, view),
                tracked_at=at,
                duration=duration,
                url=url,
                **kw)


spring_email_click = dict(campaign_name='spring', campaign_medium='email',
                          campaign_source='landing')
spring_email_open = dict(campaign_name='spring', campaign_medium='email',
                         campaign_source='open')


test_events = [
    # a: first visit, two pages and an outbound click.
    event('a', 1, None, 's1', 1, datetime(2009, 1, 12, 10, 0)),
    event('a', 1, None, 's1', 2, datetime(2009, 1, 12, 10, 5),
          duration=300, url='/cart'),
    event('a', 1, None, 's1', None, datetime(2009, 1, 12, 10, 4),
          url='http://example.com/', outbound=True),
    # c: returns from before the window, bounces.
    event('c', 2, datetime(2009, 1, 3), 's4', 1,
          datetime(2009, 1, 13, 12, 0), duration=30),
    # b: returns from before the window via an email link, bounces.
    event('b', 2, datetime(2009, 1, 5), 's2', 1,
          datetime(2009, 1, 14, 9, 0), duration=0, **spring_email_click),
    # c: comes back again within the window.
    event('c', 3, datetime(2009, 1, 13, 12, 0), 's3', 1,
          datetime(2009, 1, 15, 8, 0), url='/fruit'),
    event('c', 3, datetime(2009, 1, 13, 12, 0), 's3', 2,
          datetime(2009, 1, 15, 8, 10), duration=600, url='/fruit/apples'),
    # d: opens an email after the window, bounces.
    event('d', 1, None, 's5', 1, datetime(2009, 2, 2, 15, 0), duration=0,
          **spring_email_open),
]


other_site_events = [
    event('e', 1, None, 's9', 1, datetime(2009, 1, 12, 11, 0), duration=5,
          site=other_site_code),
]


def add_sites(store):
    store.add_site(site_code, site_id)
    store.add_site(other_site_code, other_site_id)


def load(store):
    add_sites(store)
    for ev in test_events + other_site_events:
        store.create(**ev)
    return store


sampleconfig = {
    'sqlalchemy_url': 'sqlite:///' + work_path('sampleconfig.db'),
    'site_id': site_id,
    'start': datetime(2009, 1, 10),
    'end': datetime(2009, 1, 20),
    'verbose': False,
    'error_log_path': work_path('report-debug.log'),
}
