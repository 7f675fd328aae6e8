from .track import Track
from .query import Query
from .registry import available_metrics
from .stores.memory import MemoryStore
from .exc import TrackError, MalformedIdentifier, UniquenessViolation, \
        UnknownSite
