"""
Static registry of every named scope, and the subset of them which are
reportable metrics. Every scope except the structural ones (scoped, source,
between, by, duration, campaign, medium, and the site restriction) is a
metric.
"""

from collections import OrderedDict
from types import MappingProxyType

from . import scopes
from .aggregate import Grouping


SCOPES = MappingProxyType(OrderedDict([
    ('scoped', scopes.scoped),
    ('page_views', scopes.page_views),
    ('visitors', scopes.visitors),
    ('visits', scopes.visits),
    ('new_visitors', scopes.new_visitors),
    ('repeat_visitors', scopes.repeat_visitors),
    ('repeat_visits', scopes.repeat_visits),
    ('return_visitors', scopes.return_visitors),
    ('return_visits', scopes.return_visits),
    ('entry_pages', scopes.entry_pages),
    ('landing_pages', scopes.landing_pages),
    ('exit_pages', scopes.exit_pages),
    ('duration', scopes.duration),
    ('bounces', scopes.bounces),
    ('opened_emails', scopes.opened_emails),
    ('clicked_emails', scopes.clicked_emails),
    ('between', scopes.between),
    ('by', Grouping),
    ('campaign', scopes.campaign),
    ('source', scopes.source),
    ('medium', scopes.medium),
    ('site', scopes.site),
]))


# Structural scopes and combinators, not metrics. ``site`` only restricts a
# query to one site, so it is excluded as well.
NON_METRIC_KEYS = frozenset(['scoped', 'source', 'between', 'by', 'duration',
                             'campaign', 'medium', 'site'])


METRICS = MappingProxyType(OrderedDict(
    (name, scope) for name, scope in SCOPES.items()
    if name not in NON_METRIC_KEYS))


_available_metrics = tuple(METRICS)


def available_metrics():
    """
    Names of the scopes that can be reported on as metrics, in declaration
    order.
    """
    return _available_metrics


def metric(name):
    """
    Look up a metric scope by name.

    :raises KeyError:
        If ``name`` is not a metric.
    """
    return METRICS[name]
