"""Constants used throughout the sqlreport library."""

from datetime import timedelta

# Thresholds for SQL-executing collaborators; nothing in sqlreport enforces them.
QUERY_TIME_WARNING = timedelta(milliseconds=200)
QUERY_DEADLINE = timedelta(seconds=5)

# Upper bound (exclusive) of stack frames inspected by the call-site resolver.
MAX_FRAMES = 15

TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"

SQL_ERROR_SUBJECT = "!!! SQL problem !!!"
ERROR_SUBJECT = "!!! Error !!!"

SEPARATOR = "—" * 70

DUMP_INDENT = "\t"
NIL = "nil"
