"""Press board: every job grouped by press, hot and longest-waiting first."""

from fastapi import APIRouter, Depends

from printqueue.auth.supabase_auth import get_current_user
from printqueue.board.engine import (
    group_by_press,
    hot_count,
    plate_bin_label,
    press_header_style,
)
from printqueue.board.models import UserProfile
from printqueue.board.snapshots import load_jobs, load_presses, load_settings
from printqueue.deps import get_store
from printqueue.store.base import DocumentStore

router = APIRouter()


@router.get("/board")
async def press_board(
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    """Board columns in display order, Unassigned last.

    The board always shows all jobs; list-view filters don't apply.
    """
    app_settings = load_settings(store)
    groups = group_by_press(load_jobs(store), load_presses(store))
    return {
        "showPressImages": app_settings.show_press_images,
        "groups": [
            {
                "press": g.press.to_document(),
                "jobs": [
                    {**j.to_document(), "plateBinLabel": plate_bin_label(j.plate_bin)}
                    for j in g.jobs
                ],
                "jobCount": len(g.jobs),
                "hotCount": hot_count(g),
                "headerStyle": press_header_style(g.press, app_settings.show_press_images),
            }
            for g in groups
        ],
    }
