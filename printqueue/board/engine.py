"""Job list and press board ordering.

Pure functions over snapshots of jobs and presses. Callers recompute from a
fresh snapshot on every change; nothing here holds state or mutates inputs.
"""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple, Union

from natsort import natsort_keygen, ns

from printqueue.board.models import (
    UNASSIGNED_PRESS_ID,
    FilterMode,
    Job,
    JobStatus,
    Press,
    PressGroup,
    SortMode,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

UNASSIGNED_PRESS = Press(
    id=UNASSIGNED_PRESS_ID,
    name="Unassigned",
    description="Jobs not assigned to any press",
)

_press_name_key = natsort_keygen(alg=ns.IGNORECASE)


def _timestamp(job: Job) -> datetime:
    # Missing timestamps are the oldest possible, never "now".
    return job.created_at or EPOCH


def _age_key(job: Job) -> Tuple[datetime, str]:
    return (_timestamp(job), job.id)


def filter_jobs(jobs: Iterable[Job], filter_mode: Union[FilterMode, str]) -> List[Job]:
    """Apply a list-view filter. Unknown modes keep everything."""
    if filter_mode == FilterMode.OPEN:
        return [j for j in jobs if j.status != JobStatus.COMPLETED]
    if filter_mode == FilterMode.COMPLETED:
        return [j for j in jobs if j.status == JobStatus.COMPLETED]
    if filter_mode == FilterMode.HOT:
        return [j for j in jobs if j.hot]
    return list(jobs)


def filter_and_sort(
    jobs: Iterable[Job],
    filter_mode: Union[FilterMode, str] = FilterMode.ALL,
    sort_mode: Union[SortMode, str] = SortMode.NEWEST,
) -> List[Job]:
    """Filter jobs for the list view and order them by creation time.

    ``newest`` sorts descending, anything else ascending. Equal timestamps
    fall back to job id so the two directions are exact reverses.
    """
    filtered = filter_jobs(jobs, filter_mode)
    return sorted(filtered, key=_age_key, reverse=(sort_mode == SortMode.NEWEST))


def priority_order(jobs: Iterable[Job]) -> List[Job]:
    """Hot jobs first, then longest-waiting first within each group."""
    return sorted(jobs, key=lambda j: (not j.hot, _timestamp(j), j.id))


def press_sort_key(press: Press) -> Tuple[tuple, str]:
    return (_press_name_key(press.name), press.id)


def group_by_press(jobs: Iterable[Job], presses: Iterable[Press]) -> List[PressGroup]:
    """Partition all jobs into per-press columns for the board.

    Every press gets a column even when empty. Jobs pointing at no known
    press land in a trailing "Unassigned" column, created only when needed.
    """
    groups: Dict[str, List[Job]] = {}
    by_id: Dict[str, Press] = {}
    for press in presses:
        by_id[press.id] = press
        groups[press.id] = []

    unassigned: Optional[List[Job]] = None
    for job in jobs:
        if job.press_id and job.press_id in groups and job.press_id != UNASSIGNED_PRESS_ID:
            groups[job.press_id].append(job)
        else:
            if unassigned is None:
                unassigned = []
            unassigned.append(job)

    ordered = sorted(
        (p for p in by_id.values() if p.id != UNASSIGNED_PRESS_ID),
        key=press_sort_key,
    )
    result = [PressGroup(press=p, jobs=priority_order(groups[p.id])) for p in ordered]
    if unassigned is not None:
        result.append(PressGroup(press=UNASSIGNED_PRESS, jobs=priority_order(unassigned)))
    return result


def hot_count(group: PressGroup) -> int:
    return sum(1 for j in group.jobs if j.hot)


WAITING_ON_PLATES = "Waiting on Plates"


def plate_bin_label(plate_bin: Optional[str]) -> str:
    if not plate_bin or plate_bin == WAITING_ON_PLATES:
        return WAITING_ON_PLATES
    return f"Bin {plate_bin}"


def press_header_style(press: Press, show_images: bool) -> str:
    """Which background the board uses for a press column header.

    "solid" for the Unassigned column or when images are off, "image" when
    the press has one, "plain" otherwise.
    """
    if not show_images or press.id == UNASSIGNED_PRESS_ID:
        return "solid"
    if press.image_url:
        return "image"
    return "plain"
