from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from models import Human, House

router = APIRouter()


class HumanCreate(BaseModel):
    fname: str
    lname: str
    house_id: int | None = None


def _get_human_or_404(human_id):
    human = Human.find(human_id)
    if human is None:
        raise HTTPException(status_code=404, detail="Human not found")
    return human


@router.get("/api/humans")
def get_humans(fname: str = Query(None), lname: str = Query(None), house_id: int = Query(None)):
    filters = {}
    if fname is not None:
        filters["fname"] = fname
    if lname is not None:
        filters["lname"] = lname
    if house_id is not None:
        filters["house_id"] = house_id
    return [h.to_dict() for h in Human.where(filters)]


@router.get("/api/humans/{human_id}")
def get_human(human_id: int):
    return _get_human_or_404(human_id).to_dict()


@router.post("/api/humans", status_code=201)
def add_human(human: HumanCreate):
    if human.house_id is not None and House.find(human.house_id) is None:
        raise HTTPException(status_code=404, detail="House not found")
    new_human = Human(fname=human.fname, lname=human.lname, house_id=human.house_id)
    new_human.save()
    return new_human.to_dict()


@router.get("/api/humans/{human_id}/cats")
def get_human_cats(human_id: int):
    return [c.to_dict() for c in _get_human_or_404(human_id).cats]


@router.get("/api/humans/{human_id}/house")
def get_human_house(human_id: int):
    house = _get_human_or_404(human_id).house
    if house is None:
        raise HTTPException(status_code=404, detail="Human has no house")
    return house.to_dict()
