"""Error taxonomy for the status line pipeline.

Only MalformedInput and MissingCapability ever reach the user, as the
degraded placeholder line. Everything else is caught at the segment that
needs the data and turns into an omitted segment.
"""


class StatuslineError(Exception):
    """Base class for status line errors."""


class MalformedInput(StatuslineError):
    """The stdin document could not be decoded into a snapshot."""


class MissingCapability(StatuslineError):
    """A runtime dependency needed to render is not available."""


class UnparseableTimestamp(StatuslineError, ValueError):
    """A session timestamp matched none of the accepted forms."""


class CollaboratorUnavailable(StatuslineError):
    """An external collaborator (git, terminal probe) failed or timed out."""


# Shown instead of a status line when the snapshot cannot be read at all.
DEGRADED_LINE = "📁 ~ | Claude | (invalid data)"
