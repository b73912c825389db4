"""Exception hierarchy for photonrename.

Scan-level errors abort the whole operation. Per-entry errors (decode, encode,
write) are raised inside the executor and recorded on the failing entry; they
never escape a batch run. Naming conflicts are not exceptions at all: the
planner encodes them as entry status.
"""


class PhotonRenameError(Exception):
    """Base error for the project."""


class ScanAccessError(PhotonRenameError):
    """The storage root cannot be read (permission denied, missing, not a folder)."""


class ScanCancelled(PhotonRenameError):
    """The user aborted root selection. Scanning yields an empty result."""


class EntryError(PhotonRenameError):
    """A failure isolated to a single entry during execution."""

    stage = "execution"


class DecodeError(EntryError):
    """The source bytes could not be decoded as an image."""

    stage = "decode"


class EncodeError(EntryError):
    """The resized image could not be encoded in the target format."""

    stage = "encode"


class WriteError(EntryError):
    """A storage read, write, rename or delete failed."""

    stage = "write"


class SessionBusyError(PhotonRenameError):
    """An execution was requested while another one is still running."""

