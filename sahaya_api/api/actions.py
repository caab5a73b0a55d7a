"""
Workflow actions specific to one record type.

Every status move made here goes through EntityService.transition, so each
action that changes status also appends to the history log.
"""
import uuid
from datetime import datetime, time
from typing import Optional, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from sahaya_api.api.deps import get_current_user, get_optional_user
from sahaya_api.api.entity_routes import actor_id, not_found
from sahaya_api.api.schemas import (
    AppointmentCheckIn,
    AppointmentConfirm,
    Envelope,
    EscalateRequest,
    FeedbackEntry,
    HearingRequest,
    MilestoneCreate,
    MilestoneUpdate,
    TeamMember,
)
from sahaya_api.database import get_db
from sahaya_api.exceptions import NotFoundError
from sahaya_api.models.enums import AppointmentStatus, DisputeStatus, MilestoneStatus, Urgency
from sahaya_api.security import Actor
from sahaya_api.services.entity_service import EntityService, invalid
from sahaya_api.services.registry import EntityType


def _action_router(entity_type: EntityType, auth_required: bool):
    dependencies = [Depends(get_current_user)] if auth_required else []
    router = APIRouter(prefix=f"/{entity_type.name}", tags=[entity_type.label], dependencies=dependencies)
    return router, (get_current_user if auth_required else get_optional_user)


def _load(service: EntityService, identifier: str):
    entity = service.get(identifier)
    if not entity:
        raise not_found(service.entity_type)
    return entity


def confirmed_slot(confirmed_date: datetime, confirmed_time: str) -> datetime:
    """Combine the confirmed date with an HH:MM time."""
    hour, minute = (int(part) for part in confirmed_time.split(":"))
    if hour > 23 or minute > 59:
        raise invalid("confirmed_time", "must be a valid HH:MM time")
    return datetime.combine(confirmed_date.date(), time(hour, minute))


def appointment_actions(entity_type: EntityType, Response: Type[BaseModel], auth_required: bool = False) -> APIRouter:
    router, current_actor = _action_router(entity_type, auth_required)

    @router.patch("/{identifier}/confirm", response_model=Envelope[Response])
    def confirm_appointment(
        identifier: str,
        payload: AppointmentConfirm,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Fix the schedule and mark the confirmation as sent."""
        service = EntityService(db, entity_type)
        appointment = _load(service, identifier)

        appointment.confirmed_date = service.coerce("confirmed_date", "confirmed_date", payload.confirmed_date)
        appointment.confirmed_time = payload.confirmed_time
        appointment.confirmed_slot = confirmed_slot(appointment.confirmed_date, payload.confirmed_time)
        appointment.meeting_place = payload.meeting_place
        if payload.specific_location is not None:
            appointment.specific_location = payload.specific_location
        if payload.meeting_room is not None:
            appointment.meeting_room = payload.meeting_room
        if payload.coordinator_id is not None:
            appointment.coordinator_id = service.require_user("coordinator_id", payload.coordinator_id)
        appointment.confirmation_sent = True
        appointment.confirmation_sent_date = datetime.utcnow()

        service.transition(
            appointment, AppointmentStatus.CONFIRMED, actor_id(actor), payload.comments or "Appointment confirmed"
        )
        service.save(appointment)
        return Envelope[Response](message="Appointment confirmed successfully", data=Response.model_validate(appointment))

    @router.patch("/{identifier}/checkin", response_model=Envelope[Response])
    def check_in(
        identifier: str,
        payload: Optional[AppointmentCheckIn] = None,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        service = EntityService(db, entity_type)
        appointment = _load(service, identifier)
        payload = payload or AppointmentCheckIn()

        appointment.check_in_time = service.coerce("check_in_time", "check_in_time", payload.check_in_time) or datetime.utcnow()
        service.transition(
            appointment, AppointmentStatus.CHECKED_IN, actor_id(actor), payload.comments or "Checked in"
        )
        service.save(appointment)
        return Envelope[Response](message="Checked in successfully", data=Response.model_validate(appointment))

    return router


def csr_actions(entity_type: EntityType, Response: Type[BaseModel], auth_required: bool = False) -> APIRouter:
    router, current_actor = _action_router(entity_type, auth_required)

    @router.post("/{identifier}/milestones", response_model=Envelope[Response], status_code=201)
    def add_milestone(
        identifier: str,
        payload: MilestoneCreate,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Append a milestone with a generated milestone_id."""
        service = EntityService(db, entity_type)
        project = _load(service, identifier)

        milestone = {"milestone_id": uuid.uuid4().hex, **payload.model_dump()}
        milestones = list(project.milestones or []) + [milestone]
        project.milestones = service.coerce("milestones", "milestones", milestones)
        service.save(project)
        return Envelope[Response](message="Milestone added successfully", data=Response.model_validate(project))

    @router.patch("/{identifier}/milestones/{milestone_id}", response_model=Envelope[Response])
    def update_milestone(
        identifier: str,
        milestone_id: str,
        payload: MilestoneUpdate,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        service = EntityService(db, entity_type)
        project = _load(service, identifier)

        milestones = [dict(m) for m in (project.milestones or [])]
        target = next((m for m in milestones if m.get("milestone_id") == milestone_id), None)
        if target is None:
            raise NotFoundError("Milestone not found")

        target.update(payload.model_dump(exclude_unset=True))
        if target.get("status") == MilestoneStatus.COMPLETED and not target.get("completed_date"):
            target["completed_date"] = datetime.utcnow()
        project.milestones = service.coerce("milestones", "milestones", milestones)
        service.save(project)
        return Envelope[Response](message="Milestone updated successfully", data=Response.model_validate(project))

    return router


def program_actions(entity_type: EntityType, Response: Type[BaseModel], auth_required: bool = False) -> APIRouter:
    router, current_actor = _action_router(entity_type, auth_required)

    @router.post("/{identifier}/team-members", response_model=Envelope[Response], status_code=201)
    def add_team_member(
        identifier: str,
        payload: TeamMember,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        service = EntityService(db, entity_type)
        program = _load(service, identifier)

        members = list(program.team_members or []) + [payload.model_dump()]
        program.team_members = service.coerce("team_members", "team_members", members)
        service.save(program)
        return Envelope[Response](message="Team member added successfully", data=Response.model_validate(program))

    @router.post("/{identifier}/feedback", response_model=Envelope[Response], status_code=201)
    def add_feedback(
        identifier: str,
        payload: FeedbackEntry,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Record feedback and recompute the feedback count and average rating."""
        service = EntityService(db, entity_type)
        program = _load(service, identifier)

        entry = payload.model_dump()
        entry["submitted_at"] = entry["submitted_at"] or datetime.utcnow()
        feedback = list(program.feedback or []) + [entry]
        ratings = [item["rating"] for item in feedback if item.get("rating") is not None]

        statistics = dict(program.statistics or {})
        statistics["feedback_count"] = len(feedback)
        statistics["feedback_rating"] = round(sum(ratings) / len(ratings), 2) if ratings else None

        program.feedback = service.coerce("feedback", "feedback", feedback)
        program.statistics = statistics
        service.save(program)
        return Envelope[Response](message="Feedback recorded successfully", data=Response.model_validate(program))

    return router


def emergency_actions(entity_type: EntityType, Response: Type[BaseModel], auth_required: bool = False) -> APIRouter:
    router, current_actor = _action_router(entity_type, auth_required)

    @router.patch("/{identifier}/escalate", response_model=Envelope[Response])
    def escalate(
        identifier: str,
        payload: EscalateRequest,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Flag for escalation. Priority always becomes CRITICAL."""
        service = EntityService(db, entity_type)
        emergency = _load(service, identifier)

        emergency.escalated = True
        emergency.escalated_to_id = service.require_user("escalated_to", payload.escalated_to)
        emergency.escalation_reason = payload.reason
        emergency.escalation_date = datetime.utcnow()
        emergency.priority = Urgency.CRITICAL
        service.save(emergency)
        return Envelope[Response](message="Emergency escalated successfully", data=Response.model_validate(emergency))

    return router


def dispute_actions(entity_type: EntityType, Response: Type[BaseModel], auth_required: bool = True) -> APIRouter:
    router, current_actor = _action_router(entity_type, auth_required)

    @router.patch("/{identifier}/hearing", response_model=Envelope[Response])
    def schedule_hearing(
        identifier: str,
        payload: HearingRequest,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Set the hearing details and move the dispute to MEDIATION_SCHEDULED."""
        service = EntityService(db, entity_type)
        dispute = _load(service, identifier)

        dispute.hearing_date = service.coerce("hearing_date", "hearing_date", payload.hearing_date)
        dispute.hearing_time = payload.hearing_time
        dispute.hearing_place = payload.hearing_place
        dispute.hearing_notes = payload.hearing_notes
        if payload.mediator is not None:
            dispute.mediator_id = service.require_user("mediator", payload.mediator)

        when = payload.hearing_date.strftime("%Y-%m-%d")
        service.transition(
            dispute, DisputeStatus.MEDIATION_SCHEDULED, actor_id(actor), f"Hearing scheduled for {when}"
        )
        service.save(dispute)
        return Envelope[Response](message="Hearing scheduled successfully", data=Response.model_validate(dispute))

    return router
