"""
Condition primitives which scopes are built from. Every condition can both
test a ``Track`` in Python and compile itself into a SQLAlchemy clause
against a table's columns, so a scope means the same thing in every store.

A comparison involving a missing (None) field never matches, like NULL
comparisons in SQL.
"""

import operator


class Condition(object):

    def __init__(self, field):
        self.field = field

    def _key(self):
        return (self.__class__, self.field)

    def __eq__(self, other):
        if not isinstance(other, Condition):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def matches(self, track):
        raise NotImplementedError

    def clause(self, columns):
        raise NotImplementedError


class Present(Condition):
    "Field is not null."

    def __repr__(self):
        return '<Present %s>' % self.field

    def matches(self, track):
        return getattr(track, self.field) is not None

    def clause(self, columns):
        return columns[self.field].isnot(None)


class Compare(Condition):

    symbols = {
        operator.eq: '==',
        operator.gt: '>',
        operator.lt: '<',
    }

    def __init__(self, field, op, value):
        Condition.__init__(self, field)
        self.op = op
        self.value = value

    def _key(self):
        return (self.__class__, self.field, self.op, self.value)

    def __repr__(self):
        return '<Compare %s %s %r>' % (self.field,
                                       self.symbols.get(self.op, self.op),
                                       self.value)

    def matches(self, track):
        value = getattr(track, self.field)
        if value is None or self.value is None:
            return False
        return self.op(value, self.value)

    def clause(self, columns):
        return self.op(columns[self.field], self.value)


class Equals(Compare):
    """
    Field equals a value. Equality with None matches missing fields, like
    ``IS NULL``.
    """

    def __init__(self, field, value):
        Compare.__init__(self, field, operator.eq, value)

    def matches(self, track):
        value = getattr(track, self.field)
        if self.value is None:
            return value is None
        return value is not None and value == self.value

    def clause(self, columns):
        if self.value is None:
            return columns[self.field].is_(None)
        return columns[self.field] == self.value


class Between(Condition):
    "Field lies within [start, end], inclusive on both ends."

    def __init__(self, field, start, end):
        Condition.__init__(self, field)
        self.start = start
        self.end = end

    def _key(self):
        return (self.__class__, self.field, self.start, self.end)

    def __repr__(self):
        return '<Between %s %s..%s>' % (self.field, self.start, self.end)

    def matches(self, track):
        value = getattr(track, self.field)
        if value is None:
            return False
        return self.start <= value <= self.end

    def clause(self, columns):
        return columns[self.field].between(self.start, self.end)


def gt(field, value):
    return Compare(field, operator.gt, value)


def lt(field, value):
    return Compare(field, operator.lt, value)


def match_all(conditions, track):
    return all(cond.matches(track) for cond in conditions)
