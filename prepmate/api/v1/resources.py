# prepmate/api/v1/resources.py
from fastapi import APIRouter, Depends, HTTPException

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.common import require_object_id
from prepmate.api.v1.schemas import SaveResourceIn
from prepmate.repositories import saved_resources

router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.post("/save")
async def save(payload: SaveResourceIn, current_user=Depends(get_current_user)):
    doc = await saved_resources.save_resource(
        current_user["id"], payload.title.strip(), str(payload.link), payload.description.strip())
    return {"message": "Resource saved", "resource": doc}


@router.get("/saved")
async def saved(current_user=Depends(get_current_user)):
    return {"resources": await saved_resources.list_saved(current_user["id"])}


@router.delete("/{resource_id}")
async def delete(resource_id: str, current_user=Depends(get_current_user)):
    ok = await saved_resources.delete_saved(current_user["id"], require_object_id(resource_id))
    if not ok:
        raise HTTPException(status_code=404, detail="Resource not found")
    return {"message": "Resource removed"}
