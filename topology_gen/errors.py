# Errors raised while generating, writing or reading topology files


class TopologyError(Exception):
    """Base class for every error raised by topology_gen."""


class MissingParameter(TopologyError):
    """No fat-tree parameter k was supplied."""

    def __init__(self, message="Not enough params"):
        super().__init__(message)


class InvalidParameter(TopologyError, ValueError):
    """k is not an even integer >= 4."""

    def __init__(self, k, reason):
        self.k = k
        self.reason = reason
        super().__init__(f"Wrong k: {k!r} ({reason})")


class TopologyWriteError(TopologyError, OSError):
    """The topology description could not be written to its destination."""

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"cannot write {path}: {cause}")


class TopologyFormatError(TopologyError, ValueError):
    """A topology description file could not be parsed."""

    def __init__(self, line_no, line, reason):
        self.line_no = line_no
        self.line = line
        super().__init__(f"line {line_no}: {reason}: {line!r}")
