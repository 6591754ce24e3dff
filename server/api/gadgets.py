# server/api/gadgets.py

from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from fastapi import APIRouter, Depends, Query, status

from api.deps import get_current_user_id, get_gadget_manager
from core.gadgets import GadgetManager, success_probability
from models.gadget import GadgetStatus


# -------------------------------
# Router & Schemas
# -------------------------------

router = APIRouter(prefix="/gadgets", tags=["gadgets"])


def _camel(name: str, alias: str):
    return Field(
        default=None,
        validation_alias=AliasChoices(name, alias),
        serialization_alias=alias,
    )


class Gadget(BaseModel):
    """
    Wire representation of a gadget, keyed the way API clients already expect.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    codename: str
    status: GadgetStatus
    created_at: datetime | None = _camel("created_at", "createdAt")
    destroyed_at: datetime | None = _camel("destroyed_at", "destroyedAt")
    decommissioned_at: datetime | None = _camel("decommissioned_at", "decommissionedAt")


class GadgetWithProbability(Gadget):
    mission_success_probability: int


class CreateGadgetRequest(BaseModel):
    name: str | None = None


class UpdateGadgetRequest(BaseModel):
    name: str | None = None
    status: GadgetStatus | None = None


class SelfDestructResponse(BaseModel):
    message: str
    confirmation_code: int = Field(
        validation_alias=AliasChoices("confirmation_code", "confirmationCode"),
        serialization_alias="confirmationCode",
    )
    gadget: Gadget


# -------------------------------
# Public read
# -------------------------------

@router.get("", response_model=list[GadgetWithProbability])
def list_gadgets(
    status_filter: str | None = Query(default=None, alias="status"),
    manager: GadgetManager = Depends(get_gadget_manager),
):
    """
    Lists gadgets, optionally filtered by exact status.
    A status no gadget has, known or not, yields an empty list.
    mission_success_probability is re-rolled on every call.
    """
    return [
        GadgetWithProbability(
            **Gadget.model_validate(gadget).model_dump(),
            mission_success_probability=success_probability(),
        )
        for gadget in manager.list_gadgets(status_filter)
    ]


# -------------------------------
# Authenticated writes
# -------------------------------

@router.post("", response_model=Gadget, status_code=status.HTTP_201_CREATED, dependencies=[Depends(get_current_user_id)])
def create_gadget(
    body: CreateGadgetRequest,
    manager: GadgetManager = Depends(get_gadget_manager),
):
    return Gadget.model_validate(manager.create(body.name))


@router.patch("/{gadget_id}", response_model=Gadget, dependencies=[Depends(get_current_user_id)])
def update_gadget(
    gadget_id: str,
    body: UpdateGadgetRequest,
    manager: GadgetManager = Depends(get_gadget_manager),
):
    """
    Partial update of name and/or status. Decommissioning goes through DELETE.
    """
    gadget = manager.update(gadget_id, name=body.name, status=body.status)
    return Gadget.model_validate(gadget)


@router.delete("/{gadget_id}", response_model=Gadget, dependencies=[Depends(get_current_user_id)])
def decommission_gadget(
    gadget_id: str,
    manager: GadgetManager = Depends(get_gadget_manager),
):
    return Gadget.model_validate(manager.decommission(gadget_id))


@router.post("/{gadget_id}/self-destruct", response_model=SelfDestructResponse, dependencies=[Depends(get_current_user_id)])
def self_destruct(
    gadget_id: str,
    manager: GadgetManager = Depends(get_gadget_manager),
):
    gadget, code = manager.self_destruct(gadget_id)
    return SelfDestructResponse(
        message="Self-destruct initiated",
        confirmation_code=code,
        gadget=Gadget.model_validate(gadget),
    )
