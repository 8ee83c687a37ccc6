from sqlalchemy import func
from sqlalchemy.orm import Session

from exbudget.db.models.personnel import PersonnelEntry, PersonnelGroup
from exbudget.schemas.personnel import PersonnelEntryIn, PersonnelEntryUpdate, PersonnelGroupUpdate
from exbudget.services.utils import norm_location


def get_group(db: Session, group_id: int) -> PersonnelGroup | None:
    return db.query(PersonnelGroup).filter(PersonnelGroup.id == group_id).one_or_none()


def get_entry(db: Session, entry_id: int) -> PersonnelEntry | None:
    return db.query(PersonnelEntry).filter(PersonnelEntry.id == entry_id).one_or_none()


def update_group(db: Session, g: PersonnelGroup, data: PersonnelGroupUpdate) -> PersonnelGroup:
    # explicit nulls clear the nullable overrides
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in ("pax_count", "is_long_tour", "is_local"):
            continue
        if field == "location":
            value = norm_location(value)
        setattr(g, field, value)
    db.commit()
    db.refresh(g)
    return g


def _sync_pax(db: Session, group_id: int) -> None:
    g = get_group(db, group_id)
    if g is None:
        return
    total = (
        db.query(func.coalesce(func.sum(PersonnelEntry.count), 0))
        .filter(PersonnelEntry.personnel_group_id == group_id)
        .scalar()
    )
    g.pax_count = int(total)


def add_entry(db: Session, g: PersonnelGroup, data: PersonnelEntryIn) -> PersonnelEntry:
    entry = PersonnelEntry(
        personnel_group_id=g.id,
        rank_code=data.rank_code.strip().upper() if data.rank_code else None,
        count=data.count,
        duty_days=data.duty_days,
        location=norm_location(data.location),
        is_local=data.is_local,
    )
    db.add(entry)
    db.flush()
    _sync_pax(db, g.id)
    db.commit()
    db.refresh(entry)
    return entry


def update_entry(db: Session, entry: PersonnelEntry, data: PersonnelEntryUpdate) -> PersonnelEntry:
    values = data.model_dump(exclude_unset=True)
    if values.get("rank_code"):
        values["rank_code"] = values["rank_code"].strip().upper()
    if "location" in values:
        values["location"] = norm_location(values["location"])
    if "count" in values and values["count"] is None:
        values.pop("count")
    for field, value in values.items():
        setattr(entry, field, value)
    db.flush()
    _sync_pax(db, entry.personnel_group_id)
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, entry: PersonnelEntry) -> None:
    group_id = entry.personnel_group_id
    db.delete(entry)
    db.flush()
    _sync_pax(db, group_id)
    db.commit()
