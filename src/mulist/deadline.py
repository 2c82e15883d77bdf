from __future__ import annotations

from datetime import datetime, tzinfo

from mulist.errors import AmbiguousDeadlineError, DeadlineSyntaxError

DEADLINE_FORMAT = "%Y-%m-%d %H:%M"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_local() -> datetime:
    """Current time as an aware datetime in the system zone"""
    return datetime.now().astimezone()


def _candidates(naive: datetime, tz: tzinfo | None) -> tuple[datetime, datetime]:
    if tz is None:
        return naive.replace(fold=0).astimezone(), naive.replace(fold=1).astimezone()
    return naive.replace(tzinfo=tz, fold=0), naive.replace(tzinfo=tz, fold=1)


def _wall_clock(ts: datetime, tz: tzinfo | None) -> datetime:
    # What a clock in the zone actually shows at this instant
    local = ts.astimezone() if tz is None else ts.astimezone(tz)
    return local.replace(tzinfo=None, fold=0)


def parse_deadline(text: str, *, tz: tzinfo | None = None) -> datetime:
    """
    Parse `YYYY-MM-DD HH:MM` as a wall-clock time in `tz` (system zone when None).

    Raises DeadlineSyntaxError when the text does not match the pattern, and
    AmbiguousDeadlineError when the time falls into a DST gap or overlap.
    """
    stripped = text.strip()
    try:
        naive = datetime.strptime(stripped, DEADLINE_FORMAT)
    except ValueError as exc:
        raise DeadlineSyntaxError(text, f"Invalid date format. Use YYYY-MM-DD HH:MM. ({exc})") from exc

    first, second = _candidates(naive, tz)
    if first.utcoffset() == second.utcoffset():
        return first

    if _wall_clock(first, tz) != naive:
        raise AmbiguousDeadlineError(
            text, f"{stripped} does not exist in the local timezone (skipped by a clock change).", reason="gap"
        )
    raise AmbiguousDeadlineError(
        text, f"{stripped} occurs twice in the local timezone (repeated by a clock change).", reason="overlap"
    )


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(DISPLAY_FORMAT)
