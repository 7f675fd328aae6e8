from datetime import datetime
from unittest import TestCase

from footfall import identifiers
from footfall.exc import MalformedIdentifier


class TestTimestamps(TestCase):

    def test_seconds(self):
        self.assertEqual(identifiers.to_time('1700000000'),
                         datetime(2023, 11, 14, 22, 13, 20))

    def test_milliseconds(self):
        self.assertEqual(identifiers.to_time('1700000000000'),
                         identifiers.to_time('1700000000'))
        self.assertEqual(identifiers.to_time('1700000000999'),
                         datetime(2023, 11, 14, 22, 13, 20))

    def test_empty(self):
        self.assertIsNone(identifiers.to_time(None))
        self.assertIsNone(identifiers.to_time(''))

    def test_not_a_number(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.to_time('17000x0000')

    def test_out_of_range(self):
        for raw in ('999999999999999', '9' * 30):
            with self.assertRaises(MalformedIdentifier):
                identifiers.to_time(raw)

    def test_non_ascii_digits(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.to_time('\u00b2')

    def test_from_time(self):
        dt = datetime(2023, 11, 14, 22, 13, 20)
        self.assertEqual(identifiers.from_time(dt), '1700000000')
        self.assertEqual(identifiers.from_time(None), '')


class TestVisitor(TestCase):

    def test_all_parts(self):
        vis = identifiers.decode_visitor('abc.3.1700000000.1600000000')
        self.assertEqual(vis.visitor_id, 'abc')
        self.assertEqual(vis.visit_number, 3)
        self.assertEqual(vis.current_session_at,
                         datetime(2023, 11, 14, 22, 13, 20))
        self.assertEqual(vis.previous_session_at,
                         datetime(2020, 9, 13, 12, 26, 40))

    def test_millisecond_timestamps(self):
        vis = identifiers.decode_visitor('abc.3.1700000000000.1600000000000')
        self.assertEqual(vis.previous_session_at,
                         datetime(2020, 9, 13, 12, 26, 40))

    def test_id_only(self):
        vis = identifiers.decode_visitor('abc')
        self.assertEqual(vis, ('abc', None, None, None))

    def test_empty(self):
        self.assertIsNone(identifiers.decode_visitor(''))
        self.assertIsNone(identifiers.decode_visitor(None))

    def test_too_many_parts(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.decode_visitor('abc.3.1700000000.1600000000.9')

    def test_bad_visit_number(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.decode_visitor('abc.three')

    def test_out_of_range_previous_session(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.decode_visitor('abc.2.1700000000.999999999999999')

    def test_non_ascii_visit_number(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.decode_visitor('abc.\u00b2')

    def test_reencode(self):
        for s in ('abc',
                  'abc.1',
                  'abc.1.1700000000',
                  'abc.4.1700000000.1600000000',
                  'abc.4..1600000000'):
            vis = identifiers.decode_visitor(s)
            again = identifiers.decode_visitor(
                identifiers.encode_visitor(*vis))
            self.assertEqual(again.visitor_id, vis.visitor_id)
            self.assertEqual(again.visit_number, vis.visit_number)
            self.assertEqual(again.previous_session_at,
                             vis.previous_session_at)


class TestSession(TestCase):

    def test_id_and_view(self):
        self.assertEqual(identifiers.decode_session('abc.5'), ('abc', 5))

    def test_id_only(self):
        self.assertEqual(identifiers.decode_session('abc'), ('abc', None))

    def test_legacy_three_parts(self):
        sess = identifiers.decode_session('abc.5.9')
        self.assertEqual(sess.session_id, 'abc')
        self.assertEqual(sess.view_number, 9)

    def test_empty(self):
        self.assertIsNone(identifiers.decode_session(''))

    def test_too_many_parts(self):
        with self.assertRaises(MalformedIdentifier):
            identifiers.decode_session('abc.5.9.1')

    def test_encode(self):
        self.assertEqual(identifiers.encode_session('abc', 5), 'abc.5')
        self.assertEqual(identifiers.encode_session('abc'), 'abc')
