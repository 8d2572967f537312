"""Jobs API: list with filter/sort, create, edit, complete, delete."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from pydantic import BaseModel, ConfigDict, Field, field_validator

from printqueue.api.v1.uploads import store_image
from printqueue.auth.supabase_auth import get_current_user, require_admin
from printqueue.board.engine import filter_and_sort
from printqueue.board.models import Job, JobStatus, Press, UserProfile
from printqueue.board.snapshots import load_jobs, utcnow
from printqueue.config import settings
from printqueue.deps import get_blob_storage, get_store
from printqueue.storage.blob_storage import JOB_IMAGES, BlobStorage
from printqueue.store.base import JOBS, PRESSES, DocumentNotFound, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


class JobIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    hot: bool = False
    front_color_1: Optional[str] = Field(None, alias="frontColor1")
    front_color_2: Optional[str] = Field(None, alias="frontColor2")
    back_color_1: Optional[str] = Field(None, alias="backColor1")
    back_color_2: Optional[str] = Field(None, alias="backColor2")
    press_id: Optional[str] = Field(None, alias="pressId")
    plate_bin: Optional[str] = Field(None, alias="plateBin")
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator(
        "front_color_1", "front_color_2", "back_color_1", "back_color_2",
        "press_id", "plate_bin", "notes",
    )
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        # Empty form selects mean "none".
        return value or None


def _fetch_job(store: DocumentStore, job_id: str) -> Job:
    doc = store.get(JOBS, job_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return Job.model_validate(doc)


def _press_name(store: DocumentStore, press_id: Optional[str]) -> Optional[str]:
    if not press_id:
        return None
    doc = store.get(PRESSES, press_id)
    return Press.model_validate(doc).name if doc else None


def _job_fields(store: DocumentStore, payload: JobIn) -> dict:
    data = payload.model_dump(by_alias=True)
    data["pressName"] = _press_name(store, payload.press_id)
    data["updatedAt"] = utcnow().isoformat()
    return data


@router.get("/jobs")
async def list_jobs(
    filter_mode: Optional[str] = Query(None, alias="filter"),
    sort_mode: Optional[str] = Query(None, alias="sort"),
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    """List jobs for the list/grid view.

    ``filter`` is one of all|open|completed|hot (unknown values show all);
    ``sort`` is newest|oldest.
    """
    filter_mode = filter_mode or settings.default_filter
    sort_mode = sort_mode or settings.default_sort
    jobs = filter_and_sort(load_jobs(store), filter_mode, sort_mode)
    return {
        "jobs": [j.to_document() for j in jobs],
        "count": len(jobs),
        "filter": filter_mode,
        "sort": sort_mode,
    }


@router.get("/jobs/{job_id}")
async def get_job(
    job_id: str,
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    return _fetch_job(store, job_id).to_document()


@router.post("/jobs", status_code=201)
async def create_job(
    payload: JobIn,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    data = _job_fields(store, payload)
    data.update({
        "imageUrl": None,
        "status": JobStatus.OPEN.value,
        "createdAt": data["updatedAt"],
        "createdBy": admin.summary(),
    })
    job_id = store.add(JOBS, data)
    logger.info("Job %s created by %s: %r", job_id, admin.id, payload.title)
    return Job.model_validate({"id": job_id, **data}).to_document()


@router.put("/jobs/{job_id}")
async def update_job(
    job_id: str,
    payload: JobIn,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    """Edit a job. Status, image, creator and creation time are kept."""
    existing = _fetch_job(store, job_id)
    data = _job_fields(store, payload)
    if existing.created_at is None:
        data["createdAt"] = data["updatedAt"]
    updated = store.update(JOBS, job_id, data)
    logger.info("Job %s updated by %s", job_id, admin.id)
    return Job.model_validate(updated).to_document()


@router.post("/jobs/{job_id}/complete")
async def complete_job(
    job_id: str,
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    """Mark a job completed. Completing a completed job is a no-op."""
    job = _fetch_job(store, job_id)
    if job.status == JobStatus.COMPLETED:
        return job.to_document()
    updated = store.update(JOBS, job_id, {
        "status": JobStatus.COMPLETED.value,
        "completedAt": utcnow().isoformat(),
    })
    logger.info("Job %s completed by %s", job_id, user.id)
    return Job.model_validate(updated).to_document()


@router.delete("/jobs/{job_id}", status_code=204)
async def delete_job(
    job_id: str,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    try:
        store.delete(JOBS, job_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Job not found")
    logger.info("Job %s deleted by %s", job_id, admin.id)


@router.post("/jobs/{job_id}/image")
async def upload_job_image(
    job_id: str,
    file: UploadFile = File(...),
    store: DocumentStore = Depends(get_store),
    blobs: BlobStorage = Depends(get_blob_storage),
    admin: UserProfile = Depends(require_admin),
):
    _fetch_job(store, job_id)
    url = await store_image(blobs, JOB_IMAGES, file)
    updated = store.update(JOBS, job_id, {"imageUrl": url, "updatedAt": utcnow().isoformat()})
    return Job.model_validate(updated).to_document()
