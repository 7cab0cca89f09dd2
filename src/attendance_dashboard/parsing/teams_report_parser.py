"""Parser for Microsoft Teams attendance report exports.

A report is a UTF-16LE, tab-separated text file with three numbered sections:
a key/value summary, a participants table, and in-meeting activities. Both
the Japanese and the English export labels are recognised.
"""

from __future__ import annotations

import hashlib
import io
import logging
import re

import pandas as pd

from ..common.datetime_utils import parse_report_date
from ..core.constants import ID_HEX_LENGTH
from ..sessions.model import Attendance, MergeAttendance, MergeContribution, SessionRecord
from .base import BytesSource, ParseFailure, ParseResult, ParseSuccess

log = logging.getLogger(__name__)

SUMMARY_HEADINGS = ("1. 要約", "1. Summary")
PARTICIPANTS_HEADINGS = ("2. 参加者", "2. Participants")
ACTIVITY_HEADINGS = ("3. 会議中の", "3. In-Meeting")

TITLE_KEYS = ("会議のタイトル", "Meeting title")
START_TIME_KEYS = ("開始時刻", "Start time")

NAME_COLUMNS = ("名前", "Name")
EMAIL_COLUMNS = ("メール アドレス", "メール", "Email")
DURATION_COLUMNS = ("会議の長さ", "In-Meeting Duration")

_JA_LONG = re.compile(r"(\d+)\s*時間\s*(?:(\d+)\s*分\s*)?(?:(\d+)\s*秒)?")
_JA_SHORT = re.compile(r"(\d+)\s*分\s*(\d+)\s*秒")
_EN = re.compile(r"^\s*(?:(\d+)\s*h)?\s*(?:(\d+)\s*m)?\s*(?:(\d+)\s*s)?\s*$")


def generate_id(value: str) -> str:
    """First 8 hex characters of the SHA-256 of ``value``."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:ID_HEX_LENGTH]


def clean_meeting_title(title: str) -> str:
    cleaned = re.sub(r'^"+|"+$', "", title)
    cleaned = re.sub(r'\s*で会議中"*\s*$', "", cleaned)
    cleaned = re.sub(r'^"+|"+$', "", cleaned)
    return cleaned.strip()


def parse_duration(value: str) -> int | None:
    """Convert a participant duration to seconds, or None if unrecognised."""
    text = (value or "").strip()

    m = _JA_LONG.search(text)
    if m:
        return int(m.group(1)) * 3600 + int(m.group(2) or 0) * 60 + int(m.group(3) or 0)

    m = _JA_SHORT.search(text)
    if m:
        return int(m.group(1)) * 60 + int(m.group(2))

    m = _EN.match(text)
    if m and any(m.groups()):
        hours, minutes, seconds = (int(g or 0) for g in m.groups())
        return hours * 3600 + minutes * 60 + seconds

    return None


def _first_column(columns, candidates) -> str | None:
    for c in candidates:
        if c in columns:
            return c
    return None


class TeamsReportParser:
    def parse(self, source: BytesSource) -> ParseResult:
        try:
            return self._parse(source)
        except Exception as e:  # parser contract: failures come back as an error list
            log.debug("unexpected parser failure for %s", source.name, exc_info=True)
            return ParseFailure(errors=(str(e),))

    def _parse(self, source: BytesSource) -> ParseResult:
        text = source.read_bytes().decode("utf-16-le", errors="replace").lstrip("\ufeff")

        sections = self._split_sections(text)
        if sections is None:
            return ParseFailure(errors=("Not a Teams attendance report",))
        summary_text, participants_text = sections

        title, start_time = self._parse_summary(summary_text)
        group_name = clean_meeting_title(title)
        date = parse_report_date(start_time)

        try:
            table = pd.read_csv(
                io.StringIO(participants_text),
                sep="\t",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            return ParseFailure(errors=("No participant data found",))
        except pd.errors.ParserError as e:
            return ParseFailure(errors=(f"Participants table: {e}",))

        table.columns = [str(c).strip() for c in table.columns]
        if table.empty:
            return ParseFailure(errors=("No participant data found",))

        name_col = _first_column(table.columns, NAME_COLUMNS)
        duration_col = _first_column(table.columns, DURATION_COLUMNS)
        email_col = _first_column(table.columns, EMAIL_COLUMNS)
        if name_col is None or duration_col is None:
            return ParseFailure(errors=("Participants table is missing the name or duration column",))

        group_id = generate_id(group_name)
        session_id = f"{group_id}-{date}"

        warnings: list[str] = []
        attendances: list[Attendance] = []
        merge_attendances: list[MergeAttendance] = []

        for row in table.to_dict(orient="records"):
            name = str(row.get(name_col, "")).strip()
            email = str(row.get(email_col, "")).strip() if email_col else ""
            raw_duration = str(row.get(duration_col, ""))

            seconds = parse_duration(raw_duration)
            if seconds is None:
                warnings.append(f'Invalid duration format (skipped): {name} - "{raw_duration}"')
                continue

            member_id = generate_id(email)
            attendances.append(Attendance(member_id=member_id, duration_seconds=seconds))
            merge_attendances.append(MergeAttendance(member_id=member_id, member_name=name, duration_seconds=seconds))

        record = SessionRecord(id=session_id, group_id=group_id, date=date, attendances=tuple(attendances))
        contribution = MergeContribution(
            record_id=session_id,
            group_id=group_id,
            group_name=group_name,
            date=date,
            attendances=tuple(merge_attendances),
        )
        return ParseSuccess(record=record.to_dict(), contribution=contribution, warnings=tuple(warnings))

    @staticmethod
    def _split_sections(text: str) -> tuple[str, str] | None:
        lines = re.split(r"\r?\n", text)
        summary_start = participants_start = activity_start = -1

        for i, line in enumerate(lines):
            stripped = line.strip()
            if stripped.startswith(SUMMARY_HEADINGS):
                summary_start = i
            elif stripped.startswith(PARTICIPANTS_HEADINGS):
                participants_start = i
            elif stripped.startswith(ACTIVITY_HEADINGS):
                activity_start = i

        if participants_start == -1:
            return None

        participants_end = activity_start if activity_start > participants_start else len(lines)
        summary = "\n".join(lines[summary_start + 1 : participants_start])
        participants = "\n".join(lines[participants_start + 1 : participants_end])
        return summary, participants

    @staticmethod
    def _parse_summary(summary_text: str) -> tuple[str, str]:
        title = ""
        start_time = ""
        for line in summary_text.splitlines():
            parts = line.split("\t")
            if len(parts) < 2:
                continue
            key, value = parts[0].strip(), parts[1].strip()
            if key in TITLE_KEYS:
                title = value
            elif key in START_TIME_KEYS:
                start_time = value
        return title, start_time
