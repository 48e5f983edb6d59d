"""Regular expressions for the block label grammar."""

import re

# Tab, hyphen, en dash, em dash, colon with optional space, or a plain space
SEPARATOR = r"([\t\-–—]|:\s?|\s)"
DASH = r"[-–—]"

# A1-  A12\t  B3:  C20–
BLOCK_LN = re.compile(r"^([A-Z])(\d+)" + SEPARATOR)

# A5-A10-  or  A5-10-
RANGE_LN = re.compile(r"^([A-Z])(\d+)" + DASH + r"([A-Z])?(\d+)" + SEPARATOR)

# 1A-  2B\t  1AA:  2AZ–
BLOCK_NL = re.compile(r"^(\d+)([A-Z]{1,2})" + SEPARATOR)

# 1A-1C-  or  1A-C-
RANGE_NL = re.compile(r"^(\d+)([A-Z]{1,2})" + DASH + r"(\d+)?([A-Z]{1,2})" + SEPARATOR)

INDENTED_LN = re.compile(r"^([ \t]+)([A-Z])(\d+)" + SEPARATOR)
INDENTED_NL = re.compile(r"^([ \t]+)(\d+)([A-Z]{1,2})" + SEPARATOR)

# [___]-  [   ]-  [ ]-
PLACEHOLDER_LINE = re.compile(r"^(\[[ \t_]*\])" + SEPARATOR)

# "B. The specimen is received ..."  or  "2. The specimen is received ..."
SPECIMEN_HEADER = re.compile(r"^([A-Z]|\d+)\.\s+[Tt]he specimen is received")

# specimen site "right breast lump"
SPECIMEN_SITE = re.compile(r'specimen site\s+"([^"\[\]]{3,})"', re.IGNORECASE)
