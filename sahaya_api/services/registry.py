"""
Per-type descriptors consumed by EntityService and the router factory.

Each EntityType names the model, its human-ID scheme, its status defaults and
the fields its listing, filtering and statistics work over.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type

from sahaya_api.models.domain import (
    Appointment,
    Case,
    CMRelief,
    CSRProject,
    Dispute,
    EducationAid,
    Emergency,
    Program,
    TempleLetter,
)
from sahaya_api.models.enums import (
    AidStatus,
    AppointmentStatus,
    CaseStatus,
    CSRStatus,
    DisputeStatus,
    EmergencyStatus,
    ProgramStatus,
    SlaStatus,
    TempleStatus,
)

SLA_DURATION = re.compile(r"^\s*(\d+)\s*([hd])\s*$", re.IGNORECASE)


@dataclass
class EntityType:
    """
    How one record type is identified, filtered and summarised.

    filter_fields maps query parameter -> model attribute. The partition of the
    human ID, when partition_field is set, is the district code of that field.
    """
    name: str
    model: Type
    label: str
    id_prefix: str
    default_status: Enum
    closed_status: Enum
    partition_field: Optional[str] = None
    filter_fields: Dict[str, str] = field(default_factory=dict)
    date_field: str = "created_at"
    group_by_fields: Tuple[str, ...] = ()
    sum_fields: Tuple[str, ...] = ()
    pending_statuses: Tuple[Enum, ...] = ()
    assign_status: Optional[Enum] = None
    on_create: Optional[Callable[[Any], None]] = None
    on_status_change: Optional[Callable[[Any, Enum, Optional[int]], None]] = None
    extra_stats: Optional[Callable[[Any, int], Dict[str, Any]]] = None
    # Served alongside /stats/summary when different
    stats_path: str = "/stats/summary"

    @property
    def status_enum(self):
        return type(self.default_status)


def parse_sla_duration(duration: Optional[str]) -> Optional[timedelta]:
    """'48h' -> 48 hours, '7d' -> 7 days; anything else -> None."""
    if not duration:
        return None
    match = SLA_DURATION.match(duration)
    if not match:
        return None
    amount, unit = int(match.group(1)), match.group(2).lower()
    return timedelta(hours=amount) if unit == "h" else timedelta(days=amount)


def set_case_sla(case: Case) -> None:
    delta = parse_sla_duration(case.sla_duration)
    if delta is not None and case.sla_due_date is None:
        case.sla_due_date = datetime.utcnow() + delta
    case.sla_status = SlaStatus.WITHIN_SLA


def case_sla_stats(query, total: int) -> Dict[str, Any]:
    breached = query.filter(Case.sla_status == SlaStatus.BREACHED).count()
    compliance = round((total - breached) / total * 100, 2) if total else 100.0
    return {"breached_sla": breached, "sla_compliance": compliance}


def stamp_emergency_resolution(emergency: Emergency, status: Enum, actor_id: Optional[int]) -> None:
    if status in (EmergencyStatus.RESOLVED, EmergencyStatus.CLOSED):
        now = datetime.utcnow()
        emergency.resolution_time = now
        if actor_id is not None:
            emergency.closed_by_id = actor_id
            emergency.closed_at = now


AID_PENDING = (AidStatus.REQUESTED, AidStatus.UNDER_REVIEW, AidStatus.VERIFICATION_PENDING)

ENTITY_TYPES: Dict[str, EntityType] = {
    entity_type.name: entity_type
    for entity_type in (
        EntityType(
            name="appointments",
            stats_path="/stats/overview",
            model=Appointment,
            label="Appointment",
            id_prefix="APP-AP",
            default_status=AppointmentStatus.REQUESTED,
            closed_status=AppointmentStatus.CANCELLED,
            filter_fields={
                "status": "status",
                "category": "category",
                "meeting_place": "meeting_place",
                "district": "district",
                "assigned_to": "assigned_to_id",
                "priority": "priority",
                "is_vip": "is_vip",
            },
            date_field="confirmed_date",
            group_by_fields=("category", "meeting_place", "priority"),
            pending_statuses=(AppointmentStatus.REQUESTED, AppointmentStatus.UNDER_REVIEW),
        ),
        EntityType(
            name="cases",
            stats_path="/stats/dashboard",
            model=Case,
            label="Case",
            id_prefix="CASE",
            default_status=CaseStatus.PENDING,
            closed_status=CaseStatus.CLOSED,
            filter_fields={
                "status": "status",
                "department": "department",
                "district": "district",
                "priority": "priority",
                "case_type": "case_type",
                "assigned_to": "assigned_to_id",
            },
            group_by_fields=("case_type", "department", "priority"),
            sum_fields=("estimated_amount", "proposed_budget"),
            pending_statuses=(CaseStatus.PENDING,),
            on_create=set_case_sla,
            extra_stats=case_sla_stats,
        ),
        EntityType(
            name="cmrelief",
            model=CMRelief,
            label="CM Relief request",
            id_prefix="CMRF",
            partition_field="district",
            default_status=AidStatus.REQUESTED,
            closed_status=AidStatus.CANCELLED,
            filter_fields={
                "status": "status",
                "relief_type": "relief_type",
                "district": "district",
                "assigned_to": "assigned_to_id",
                "verification_status": "verification_status",
                "urgency": "urgency",
            },
            group_by_fields=("relief_type", "urgency"),
            sum_fields=("requested_amount", "approved_amount"),
            pending_statuses=AID_PENDING,
        ),
        EntityType(
            name="csrindustrial",
            stats_path="/stats/overview",
            model=CSRProject,
            label="CSR project",
            id_prefix="CSR-AP",
            default_status=CSRStatus.LEAD,
            closed_status=CSRStatus.CLOSED,
            filter_fields={
                "status": "status",
                "project_category": "project_category",
                "district": "district",
                "assigned_to": "assigned_to_id",
                "priority": "priority",
            },
            group_by_fields=("project_category",),
            sum_fields=("proposed_budget", "approved_budget"),
            pending_statuses=(CSRStatus.LEAD, CSRStatus.DUE_DILIGENCE, CSRStatus.PROPOSAL_REVIEW),
        ),
        EntityType(
            name="disputes",
            model=Dispute,
            label="Dispute",
            id_prefix="DSP-AP",
            partition_field="district",
            default_status=DisputeStatus.NEW,
            closed_status=DisputeStatus.CLOSED,
            filter_fields={
                "status": "status",
                "category": "category",
                "district": "district",
                "assigned_to": "assigned_to_id",
                "mediator": "mediator_id",
            },
            date_field="hearing_date",
            group_by_fields=("category",),
            pending_statuses=(DisputeStatus.NEW, DisputeStatus.UNDER_REVIEW),
        ),
        EntityType(
            name="education",
            model=EducationAid,
            label="Education aid request",
            id_prefix="EDU",
            partition_field="district",
            default_status=AidStatus.REQUESTED,
            closed_status=AidStatus.CANCELLED,
            filter_fields={
                "status": "status",
                "education_type": "education_type",
                "support_type": "support_type",
                "district": "district",
                "assigned_to": "assigned_to_id",
                "verification_status": "verification_status",
                "urgency": "urgency",
            },
            group_by_fields=("education_type", "support_type"),
            sum_fields=("requested_amount", "approved_amount"),
            pending_statuses=AID_PENDING,
        ),
        EntityType(
            name="emergencies",
            stats_path="/stats/overview",
            model=Emergency,
            label="Emergency",
            id_prefix="EMR",
            partition_field="district",
            default_status=EmergencyStatus.LOGGED,
            closed_status=EmergencyStatus.CLOSED,
            filter_fields={
                "status": "status",
                "emergency_type": "emergency_type",
                "urgency": "urgency",
                "assigned_to": "assigned_to_id",
                "district": "district",
            },
            group_by_fields=("emergency_type", "urgency"),
            pending_statuses=(EmergencyStatus.LOGGED, EmergencyStatus.DISPATCHED, EmergencyStatus.IN_PROGRESS),
            assign_status=EmergencyStatus.DISPATCHED,
            on_status_change=stamp_emergency_resolution,
        ),
        EntityType(
            name="programs",
            stats_path="/stats/overview",
            model=Program,
            label="Program",
            id_prefix="PRG-AP",
            partition_field="district",
            default_status=ProgramStatus.PLANNED,
            closed_status=ProgramStatus.CANCELLED,
            filter_fields={
                "status": "status",
                "type": "type",
                "venue": "venue",
                "district": "district",
                "assigned_to": "assigned_to_id",
            },
            date_field="start_date",
            group_by_fields=("type",),
            pending_statuses=(ProgramStatus.PLANNED, ProgramStatus.REGISTRATION),
        ),
        EntityType(
            name="temples",
            model=TempleLetter,
            label="Temple letter request",
            id_prefix="TDL",
            partition_field="district",
            default_status=TempleStatus.REQUESTED,
            closed_status=TempleStatus.CANCELLED,
            filter_fields={
                "status": "status",
                "darshan_type": "darshan_type",
                "temple_name": "temple_name",
                "district": "district",
                "assigned_to": "assigned_to_id",
            },
            date_field="preferred_date",
            group_by_fields=("darshan_type",),
            sum_fields=("number_of_people",),
            pending_statuses=(TempleStatus.REQUESTED, TempleStatus.UNDER_REVIEW),
        ),
    )
}


def get_entity_type(name: str) -> EntityType:
    return ENTITY_TYPES[name]
