from fastapi import HTTPException

from exbudget.db.session import SessionLocal

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{what} not found")
