# -*- coding: utf-8 -*-
"""Check-ins — API endpoints (client-owned; coaches read through /api/coach)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile

from ..auth.security import get_current_user, is_coach
from .models import CheckIn, CheckInCreateRequest, CheckInListResponse, PhotoType, ProgressPhoto
from .photos import LocalBlobStorage, media_type_for, photo_storage_path, read_upload
from .storage import create_check_in, get_check_in, list_check_ins, save_photo_reference

router = APIRouter(prefix="/api/checkin", tags=["Check-ins"])
photos_router = APIRouter(prefix="/api/photos", tags=["Check-ins"])


@router.post("", response_model=CheckIn, summary="Submit this week's check-in")
def submit_check_in(request: CheckInCreateRequest, user: dict = Depends(get_current_user)):
    row = create_check_in(user_id=user["id"], request=request)
    return CheckIn.model_validate(row)


@router.get("", response_model=CheckInListResponse, summary="List my check-ins")
def my_check_ins(user: dict = Depends(get_current_user)):
    rows = list_check_ins(user["id"])
    return CheckInListResponse(count=len(rows), check_ins=[CheckIn.model_validate(r) for r in rows])


@router.post("/{check_in_id}/photos", response_model=ProgressPhoto, summary="Upload a progress photo")
def upload_progress_photo(
    check_in_id: str,
    photo_type: PhotoType = Form(...),
    file: UploadFile = File(...),
    user: dict = Depends(get_current_user),
):
    check_in = get_check_in(check_in_id)
    if not check_in or check_in["user_id"] != user["id"]:
        raise HTTPException(status_code=404, detail="Check-in not found")

    data = read_upload(file)
    storage_path = photo_storage_path(user["id"], check_in_id, photo_type, file.filename)
    blobs = LocalBlobStorage()
    blobs.save(storage_path, data)
    row = save_photo_reference(
        user_id=user["id"],
        check_in_id=check_in_id,
        photo_type=photo_type,
        storage_path=storage_path,
    )
    # A re-upload with another extension must not leave the previous file behind.
    for previous in check_in["progress_photos"]:
        if previous["photo_type"] == photo_type and previous["storage_path"] != storage_path:
            blobs.delete(previous["storage_path"])
    return ProgressPhoto.model_validate(row)


@photos_router.get("/{storage_path:path}", summary="Read a progress photo")
def read_progress_photo(storage_path: str, user: dict = Depends(get_current_user)):
    # Clients can only read their own photos, coaches can read all.
    if not is_coach(user) and not storage_path.startswith(user["id"] + "/"):
        raise HTTPException(status_code=403, detail="Forbidden")
    blobs = LocalBlobStorage()
    if not blobs.exists(storage_path):
        raise HTTPException(status_code=404, detail="Not found")
    return Response(
        content=blobs.read(storage_path),
        media_type=media_type_for(storage_path),
        headers={"Cache-Control": "private, max-age=3600"},
    )
