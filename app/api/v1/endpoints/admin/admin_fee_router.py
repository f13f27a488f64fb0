from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.fee_schemas import FeeStructureCreate, FeeStructureResponse, FeeStructureUpdate
from app.services.dependencies import get_current_admin
from app.services.fee_structure_service import (
    create_fee_structure,
    delete_fee_structure,
    get_fee_structure_or_404,
    list_fee_structures,
    update_fee_structure,
)

router = APIRouter(prefix="/admin/fees", tags=["Fee Structures (Admin)"])


@router.get("", response_model=list[FeeStructureResponse])
def get_fee_structures(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return list_fee_structures(db)


@router.post("", response_model=FeeStructureResponse, status_code=status.HTTP_201_CREATED)
def add_fee_structure(
    payload: FeeStructureCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return create_fee_structure(db=db, payload=payload)


@router.get("/{fee_structure_id}", response_model=FeeStructureResponse)
def get_fee_structure(
    fee_structure_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_fee_structure_or_404(db, fee_structure_id)


@router.put("/{fee_structure_id}", response_model=FeeStructureResponse)
def edit_fee_structure(
    fee_structure_id: str,
    payload: FeeStructureUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return update_fee_structure(db=db, fee_structure_id=fee_structure_id, payload=payload)


@router.delete("/{fee_structure_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_fee_structure(
    fee_structure_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    delete_fee_structure(db=db, fee_structure_id=fee_structure_id)
    return None
