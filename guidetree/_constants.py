"""Literal markers shared by the canonical text reader and writer.

Keeping them in one module stops the writer and reader from drifting apart,
which would break the text round trip.

Examples
--------
>>> from guidetree import _constants
>>> _constants.HEADING_MARKER * 2
'##'
>>> "- item".startswith(_constants.ESCAPED_PREFIXES)
True
"""

FRONT_MATTER_DELIMITER = "---"
HEADING_MARKER = "#"
LIST_MARKER = "- "
COMMAND_PROMPT = "$"
ESCAPE_CHAR = "\\"
FENCE_CHAR = "`"
MIN_FENCE_LENGTH = 3
ESCAPED_PREFIXES = ("#", "-", "$", "`", "\\")
DEFAULT_CONFIG_FILE = "guidetree.yaml"
