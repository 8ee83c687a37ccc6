from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from exbudget.core.deps import get_db, not_found
from exbudget.crud.personnel import add_entry, delete_entry, get_entry, get_group, update_entry, update_group
from exbudget.schemas.personnel import (
    PersonnelEntryIn,
    PersonnelEntryOut,
    PersonnelEntryUpdate,
    PersonnelGroupOut,
    PersonnelGroupUpdate,
)

groups_router = APIRouter()
entries_router = APIRouter()


def _group_or_404(db: Session, group_id: int):
    g = get_group(db, group_id)
    if not g:
        raise not_found("Personnel group")
    return g


def _entry_or_404(db: Session, entry_id: int):
    entry = get_entry(db, entry_id)
    if not entry:
        raise not_found("Personnel entry")
    return entry


@groups_router.get("/{group_id}", response_model=PersonnelGroupOut)
def get_one_group(group_id: int, db: Session = Depends(get_db)):
    return _group_or_404(db, group_id)


@groups_router.put("/{group_id}", response_model=PersonnelGroupOut)
def put_group(group_id: int, data: PersonnelGroupUpdate, db: Session = Depends(get_db)):
    return update_group(db, _group_or_404(db, group_id), data)


@groups_router.post("/{group_id}/entries", response_model=PersonnelEntryOut, status_code=201)
def post_entry(group_id: int, data: PersonnelEntryIn, db: Session = Depends(get_db)):
    return add_entry(db, _group_or_404(db, group_id), data)


@entries_router.put("/{entry_id}", response_model=PersonnelEntryOut)
def put_entry(entry_id: int, data: PersonnelEntryUpdate, db: Session = Depends(get_db)):
    return update_entry(db, _entry_or_404(db, entry_id), data)


@entries_router.delete("/{entry_id}")
def remove_entry(entry_id: int, db: Session = Depends(get_db)):
    delete_entry(db, _entry_or_404(db, entry_id))
    return {"deleted": entry_id}
