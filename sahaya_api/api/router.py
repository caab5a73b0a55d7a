"""All API routes, mounted under /api by main.py."""
from fastapi import APIRouter

from sahaya_api.api import health, schemas, users
from sahaya_api.api.actions import (
    appointment_actions,
    csr_actions,
    dispute_actions,
    emergency_actions,
    program_actions,
)
from sahaya_api.api.entity_routes import EntitySchemas, build_entity_router
from sahaya_api.services.registry import get_entity_type

ENTITY_SCHEMAS = {
    "appointments": EntitySchemas(schemas.AppointmentCreate, schemas.AppointmentUpdate, schemas.AppointmentResponse),
    "cases": EntitySchemas(schemas.CaseCreate, schemas.CaseUpdate, schemas.CaseResponse),
    "cmrelief": EntitySchemas(schemas.CMReliefCreate, schemas.CMReliefUpdate, schemas.CMReliefResponse),
    "csrindustrial": EntitySchemas(schemas.CSRProjectCreate, schemas.CSRProjectUpdate, schemas.CSRProjectResponse),
    "disputes": EntitySchemas(schemas.DisputeCreate, schemas.DisputeUpdate, schemas.DisputeResponse),
    "education": EntitySchemas(schemas.EducationAidCreate, schemas.EducationAidUpdate, schemas.EducationAidResponse),
    "emergencies": EntitySchemas(schemas.EmergencyCreate, schemas.EmergencyUpdate, schemas.EmergencyResponse),
    "programs": EntitySchemas(schemas.ProgramCreate, schemas.ProgramUpdate, schemas.ProgramResponse),
    "temples": EntitySchemas(schemas.TempleLetterCreate, schemas.TempleLetterUpdate, schemas.TempleLetterResponse),
}

# Routers that refuse anonymous callers
AUTH_REQUIRED = {"cmrelief", "disputes", "temples"}

WORKFLOW_ACTIONS = {
    "appointments": appointment_actions,
    "csrindustrial": csr_actions,
    "disputes": dispute_actions,
    "emergencies": emergency_actions,
    "programs": program_actions,
}

router = APIRouter()
router.include_router(health.router)
router.include_router(users.router)

for name, entity_schemas in ENTITY_SCHEMAS.items():
    entity_type = get_entity_type(name)
    auth_required = name in AUTH_REQUIRED
    router.include_router(build_entity_router(entity_type, entity_schemas, auth_required=auth_required))
    if name in WORKFLOW_ACTIONS:
        router.include_router(WORKFLOW_ACTIONS[name](entity_type, entity_schemas.response, auth_required=auth_required))
