"""Statement file formats accepted by the importer."""

from enum import Enum


class StatementFormat(str, Enum):
    """Statement grammar requested by (or detected for) an upload.

    AUTO asks the format resolver to decide from the file name and
    content type.
    """

    AUTO = "auto"
    CSV = "csv"
    OFX = "ofx"
