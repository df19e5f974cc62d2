from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from models import House

router = APIRouter()


class HouseCreate(BaseModel):
    address: str


def _get_house_or_404(house_id):
    house = House.find(house_id)
    if house is None:
        raise HTTPException(status_code=404, detail="House not found")
    return house


@router.get("/api/houses")
def get_houses():
    return [h.to_dict() for h in House.all()]


@router.get("/api/houses/{house_id}")
def get_house(house_id: int):
    return _get_house_or_404(house_id).to_dict()


@router.post("/api/houses", status_code=201)
def add_house(house: HouseCreate):
    new_house = House(address=house.address)
    new_house.save()
    return new_house.to_dict()


@router.get("/api/houses/{house_id}/humans")
def get_house_humans(house_id: int):
    return [h.to_dict() for h in _get_house_or_404(house_id).humans]
