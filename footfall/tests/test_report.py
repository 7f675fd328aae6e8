import io
from contextlib import redirect_stdout
from datetime import datetime

from footfall import report
from footfall.stores.memory import MemoryStore
from footfall.stores.sql import SQLStore

from . import data
from .base import BaseTest


expected_window = {
    'page_views': '6',
    'visitors': '3',
    'visits': '4',
    'new_visitors': '1',
    'repeat_visitors': '1',
    'repeat_visits': '1',
    'return_visitors': '2',
    'return_visits': '2',
    'entry_pages': '4',
    'landing_pages': '1',
    'exit_pages': '4',
    'bounces': '2',
    'opened_emails': '0',
    'clicked_emails': '1',
    'bounce_rate': '0.500',
}


class TestReport(BaseTest):

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            report.main(argv)
        return dict(line.split() for line in out.getvalue().splitlines())

    def test_window(self):
        self.assertIsNone(report.window(None, None))
        start, end = report.window(datetime(2009, 1, 10),
                                   datetime(2009, 1, 20))
        self.assertEqual(start, datetime(2009, 1, 10))
        self.assertEqual(end, datetime(2009, 1, 20, 23, 59, 59, 999999))
        start, end = report.window(None, datetime(2009, 1, 20))
        self.assertEqual(start, datetime.min)

    def test_build_report(self):
        store = data.load(MemoryStore())
        results = dict(report.build_report(store, site_id=data.site_id))
        self.assertEqual(results['page_views'], 7)
        self.assertEqual(results['bounces'], 3)
        self.assertEqual(results['bounce_rate'], 0.6)

    def test_build_report_by(self):
        store = data.load(MemoryStore())
        results = dict(report.build_report(store, site_id=data.site_id,
                                           by=['month']))
        self.assertEqual(results['page_views'], [
            {'tracked_at': datetime(2009, 1, 1), 'count': 6},
            {'tracked_at': datetime(2009, 2, 1), 'count': 1},
        ])

    def test_main(self):
        url = 'sqlite:///' + data.work_path('report.db')
        data.load(SQLStore(url))
        results = self._run(['-u', url, '-s', str(data.site_id),
                             '--start', '2009-01-10', '--end', '2009-01-20'])
        self.assertEqual(results, expected_window)

    def test_python_config(self):
        data.load(SQLStore(data.sampleconfig['sqlalchemy_url']))
        results = self._run(['--config', 'footfall.tests.data.sampleconfig'])
        self.assertEqual(results, expected_window)

    def test_format_value(self):
        self.assertEqual(report.format_value(None), '-')
        self.assertEqual(report.format_value(0.25), '0.250')
        self.assertEqual(report.format_value([]), '-')
        self.assertEqual(
            report.format_value([{'url': '/', 'count': 4}]), '/: 4')
