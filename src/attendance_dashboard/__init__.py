"""Attendance Dashboard package.

Organized by feature modules (sessions, index, parsing, local_batch, ...)
with a thin Flask controller layer over the published JSON dataset and a
local batch pipeline that converts attendance-report CSVs into that dataset.
"""

__version__ = "0.1.0"
