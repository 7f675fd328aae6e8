import logging
import logging.config
import sys
import argparse
from datetime import datetime, timedelta

from . import registry
from .stores.sql import SQLStore


log = logging.getLogger(__name__)


date_format = '%Y-%m-%d'


def logging_config(verbose=False, filename=None):
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': sys.stderr,
            'formatter': 'generic',
            'level': logging.DEBUG if verbose else logging.WARN,
        },
        'null': {
            'class': 'logging.NullHandler',
        }
    }

    if filename:
        handlers['root_file'] = {
            'class': 'logging.FileHandler',
            'formatter': 'generic',
            'level': 'NOTSET',
            'filename': filename,
        }

    return {
        'version': 1,
        'formatters': {
            'generic': {
                'format':
                "%(asctime)s %(levelname)-5.5s [%(name)s] %(message)s"
            },
        },
        'handlers': handlers,
        'loggers': {
            'footfall': {
                'propagate': True,
                'level': 'NOTSET',
                'handlers': list(handlers.keys()),
            },
        },
        'root': {
            'level': 'DEBUG',
            'handlers': ['null']
        }
    }


def parse_date(s):
    return datetime.strptime(s, date_format) if s else None


def parse_fields(s):
    return [field.strip() for field in s.split(',')] if s else []


def load_args_config(args):
    return dict(verbose=args.verbose,
                error_log_path=args.error_log_path,
                sqlalchemy_url=args.url,
                site_id=args.site,
                start=parse_date(args.start),
                end=parse_date(args.end),
                by=parse_fields(args.by),
                tz=args.tz)


def load_python_config(namespace):
    mod_name, attr_name = namespace.rsplit('.', 1)
    __import__(mod_name)
    mod = sys.modules[mod_name]
    return dict(getattr(mod, attr_name))


def window(start, end):
    """
    Turn a pair of dates into an inclusive range covering the whole of the
    end day.
    """
    if not start and not end:
        return None
    start = start or datetime.min
    if end:
        end = end + timedelta(days=1) - timedelta(microseconds=1)
    else:
        end = datetime.max
    return start, end


def build_report(store, site_id=None, start=None, end=None, by=None,
                 tz=None):
    """
    Compute every available metric.

    :returns:
        List of ``(metric name, value)`` pairs. Without ``by`` the value is
        a count; with ``by`` it is a list of grouped rows.
    """
    base = store.query()
    if site_id is not None:
        base = base.site(site_id)

    span = window(start, end)
    report = []
    for name in registry.available_metrics():
        q = base.metric(name).between(span)
        if by:
            report.append((name, q.by(by, tz=tz).all()))
        else:
            report.append((name, q.count()))

    rate = base.bounces().between(span).rate()
    report.append(('bounce_rate', rate))
    return report


def format_value(value):
    if value is None:
        return '-'
    if isinstance(value, float):
        return '%0.3f' % value
    if isinstance(value, list):
        return ', '.join(format_row(row) for row in value) or '-'
    return str(value)


def format_row(row):
    key = ' '.join(str(v) for k, v in row.items() if k != 'count')
    return '%s: %d' % (key, row['count'])


def main(argv=None):
    p = argparse.ArgumentParser(
        description='Print visit metrics from a footfall database.')

    p.add_argument('-v', '--verbose', dest='verbose', action='store_true',
                   default=False, help='Print detailed output')
    p.add_argument('--log', dest='error_log_path', type=str,
                   help='Path to error/debug log')
    p.add_argument('-u', '--url', dest='url', type=str,
                   help='SQL database URL')
    p.add_argument('-s', '--site', dest='site', type=int,
                   help='Only report on this site id')
    p.add_argument('--start', type=str,
                   help='First day of the report, as YYYY-MM-DD')
    p.add_argument('--end', type=str,
                   help='Last day of the report, as YYYY-MM-DD')
    p.add_argument('--by', type=str,
                   help='Comma separated fields to group by, e.g. month')
    p.add_argument('--tz', type=str,
                   help='Time zone to bucket dates in, e.g. '
                   'America/Los_Angeles')

    p.add_argument('--config', type=str,
                   help='Python namespace to use for configuration')

    args = p.parse_args(argv)

    if args.config:
        config = load_python_config(args.config)
    else:
        config = load_args_config(args)

    logging.config.dictConfig(logging_config(config.pop('verbose', False),
                                             config.pop('error_log_path',
                                                        None)))

    url = config.pop('sqlalchemy_url', None)
    if not url:
        p.error('a database URL is required')

    log.info('Reporting from %s', url)
    store = SQLStore(url)

    for name, value in build_report(store, **config):
        print('%-16s %s' % (name, format_value(value)))
