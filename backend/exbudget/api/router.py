from fastapi import APIRouter
from exbudget.api.routers import exercises, units, personnel, cost_lines, rates, reports, data

api_router = APIRouter()
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(units.router, prefix="/units", tags=["units"])
api_router.include_router(personnel.groups_router, prefix="/personnel-groups", tags=["personnel"])
api_router.include_router(personnel.entries_router, prefix="/personnel-entries", tags=["personnel"])
api_router.include_router(cost_lines.execution_router, prefix="/execution-costs", tags=["cost-lines"])
api_router.include_router(cost_lines.om_router, prefix="/om-costs", tags=["cost-lines"])
api_router.include_router(rates.router, prefix="/rates", tags=["rates"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(data.router, prefix="/data", tags=["data"])
