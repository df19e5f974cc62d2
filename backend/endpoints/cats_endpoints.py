from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from minirecord import DatabaseEngine
from models import Cat, Human
from deps import get_engine

router = APIRouter()


class CatCreate(BaseModel):
    name: str
    owner_id: int | None = None


class CatUpdate(BaseModel):
    name: str | None = None
    owner_id: int | None = None


def _get_cat_or_404(cat_id):
    cat = Cat.find(cat_id)
    if cat is None:
        raise HTTPException(status_code=404, detail="Cat not found")
    return cat


def _check_owner(owner_id):
    if owner_id is not None and Human.find(owner_id) is None:
        raise HTTPException(status_code=404, detail="Owner not found")


@router.get("/api/cats")
def get_cats(name: str = Query(None), owner_id: int = Query(None)):
    filters = {}
    if name is not None:
        filters["name"] = name
    if owner_id is not None:
        filters["owner_id"] = owner_id
    return [c.to_dict() for c in Cat.where(filters)]


@router.get("/api/cats/{cat_id}")
def get_cat(cat_id: int):
    return _get_cat_or_404(cat_id).to_dict()


@router.post("/api/cats", status_code=201)
def add_cat(cat: CatCreate, engine: DatabaseEngine = Depends(get_engine)):
    with engine.transaction():
        _check_owner(cat.owner_id)
        new_cat = Cat(name=cat.name, owner_id=cat.owner_id)
        new_cat.save()
    return new_cat.to_dict()


@router.put("/api/cats/{cat_id}")
def update_cat(cat_id: int, cat: CatUpdate, engine: DatabaseEngine = Depends(get_engine)):
    with engine.transaction():
        existing = _get_cat_or_404(cat_id)
        if cat.owner_id is not None:
            _check_owner(cat.owner_id)
            existing.owner_id = cat.owner_id
        if cat.name is not None:
            existing.name = cat.name
        existing.save()
    return existing.to_dict()


@router.delete("/api/cats/{cat_id}")
def delete_cat(cat_id: int):
    _get_cat_or_404(cat_id).destroy()
    return {"message": "Cat deleted"}


@router.get("/api/cats/{cat_id}/owner")
def get_cat_owner(cat_id: int):
    owner = _get_cat_or_404(cat_id).owner
    if owner is None:
        raise HTTPException(status_code=404, detail="Cat has no owner")
    return owner.to_dict()


@router.get("/api/cats/{cat_id}/home")
def get_cat_home(cat_id: int):
    home = _get_cat_or_404(cat_id).home
    if home is None:
        raise HTTPException(status_code=404, detail="Cat has no home")
    return home.to_dict()
