# runroutes/core/errors.py


class RunRoutesError(Exception):
    """
    Base class for errors raised by the service layer.

    The recommendation engine itself never raises; these cover the
    collaborators around it.
    """


class CandidateSourceError(RunRoutesError):
    """
    The external route-generation service could not produce candidates
    (every request failed at the transport or HTTP level).
    """
