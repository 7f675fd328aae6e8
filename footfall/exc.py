class TrackError(Exception):
    pass


class MalformedIdentifier(TrackError, ValueError):
    """
    A visitor or session cookie string could not be decoded.
    """
    pass


class UniquenessViolation(TrackError):
    """
    A track with the same (site, visitor, session, view) already exists.
    """
    pass


class UnknownSite(TrackError, LookupError):
    """
    A site tracker code did not resolve to a site.
    """
    pass
