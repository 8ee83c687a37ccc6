from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from exbudget.core.deps import get_db
from exbudget.schemas.transfer import DataBundle, ImportResultOut
from exbudget.services.transfer.service import export_all, import_all

router = APIRouter()


@router.get("/export", response_model=DataBundle)
def export_data(db: Session = Depends(get_db)):
    return export_all(db)


@router.post("/import", response_model=ImportResultOut)
def import_data(bundle: DataBundle, db: Session = Depends(get_db)):
    try:
        return import_all(db, bundle)
    except IntegrityError as e:
        raise HTTPException(status_code=409, detail=f"Import rejected: {e.orig}")
