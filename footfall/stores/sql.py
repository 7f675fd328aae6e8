import logging

from sqlalchemy import (MetaData, Table, Column, ForeignKey, UniqueConstraint,
                        types, create_engine, select, exc)

from ..conditions import Equals
from ..exc import UniquenessViolation, UnknownSite
from ..track import Track
from . import Store


log = logging.getLogger(__name__)


class SQLStore(Store):
    """
    Stores tracks in a SQL database through SQLAlchemy. Scope conditions are
    compiled into the WHERE clause; grouping and time bucketing are done by
    the query on the loaded rows.
    """

    def __init__(self, sqlalchemy_url, pool_recycle=3600):
        self.engine = create_engine(sqlalchemy_url,
                                    pool_recycle=pool_recycle)
        self.metadata = MetaData()

        self.sites_table = Table(
            'sites',
            self.metadata,
            Column('id', types.Integer, primary_key=True),
            Column('tracker', types.String(255), nullable=False,
                   unique=True),
            mysql_engine='InnoDB')

        self.tracks_table = Table(
            'tracks',
            self.metadata,
            Column('id', types.Integer, primary_key=True),
            Column('site_id', None, ForeignKey('sites.id'), nullable=True,
                   index=True),
            Column('site_code', types.String(255), nullable=True),
            Column('visitor_id', types.String(255), nullable=True),
            Column('visit_number', types.Integer, nullable=True),
            Column('previous_session_at', types.DateTime, nullable=True),
            Column('session_id', types.String(255), nullable=True),
            Column('view_number', types.Integer, nullable=True),
            Column('tracked_at', types.DateTime, nullable=True, index=True),
            Column('duration', types.Integer, nullable=True),
            Column('url', types.String(2048), nullable=True),
            Column('page_title', types.String(255), nullable=True),
            Column('referrer', types.String(2048), nullable=True),
            Column('outbound', types.Boolean, nullable=False, default=False),
            Column('ip_address', types.String(45), nullable=True),
            Column('user_agent', types.String(1024), nullable=True),
            Column('campaign_name', types.String(255), nullable=True),
            Column('campaign_source', types.String(255), nullable=True),
            Column('campaign_medium', types.String(255), nullable=True),
            Column('campaign_content', types.String(255), nullable=True),
            Column('campaign_term', types.String(255), nullable=True),
            UniqueConstraint('site_id', 'visitor_id', 'session_id',
                             'view_number', name='tracks_unique_view'),
            mysql_engine='InnoDB')

        self.metadata.create_all(self.engine)

    def add_site(self, tracker, site_id=None):
        values = dict(tracker=tracker)
        if site_id is not None:
            values['id'] = site_id
        q = self.sites_table.insert().values(**values)
        with self.engine.begin() as conn:
            return conn.execute(q).inserted_primary_key[0]

    def resolve_site(self, code):
        t = self.sites_table
        q = select(t.c.id).where(t.c.tracker == code)
        with self.engine.connect() as conn:
            site_id = conn.execute(q).scalar()
        if site_id is None:
            raise UnknownSite('No site with tracker code %r' % code)
        return site_id

    def exists(self, key):
        t = self.tracks_table
        fields = ('site_id', 'visitor_id', 'session_id', 'view_number')
        q = select(t.c.id).limit(1)
        for field, value in zip(fields, key):
            q = q.where(Equals(field, value).clause(t.c))
        with self.engine.connect() as conn:
            return conn.execute(q).scalar() is not None

    def add(self, track):
        key = track.uniqueness_key()
        if key is not None and self.exists(key):
            raise UniquenessViolation('Duplicate view: %r' % (key,))

        values = track.to_dict()
        if values['id'] is None:
            del values['id']

        q = self.tracks_table.insert().values(**values)
        try:
            with self.engine.begin() as conn:
                track_id = conn.execute(q).inserted_primary_key[0]
        except exc.IntegrityError as e:
            if key is None:
                raise
            raise UniquenessViolation('Duplicate view: %r (%s)' % (key, e))

        track = track.replace(id=track_id)
        log.debug('Added %r', track)
        return track

    def select(self, conditions):
        t = self.tracks_table
        q = select(t)
        for cond in conditions:
            q = q.where(cond.clause(t.c))
        q = q.order_by(t.c.tracked_at.is_(None), t.c.tracked_at, t.c.id)
        with self.engine.connect() as conn:
            rows = conn.execute(q).mappings().all()
        return [Track(**row) for row in rows]
