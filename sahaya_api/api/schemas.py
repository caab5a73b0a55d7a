"""Pydantic schemas for request/response validation."""
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, create_model

from sahaya_api.models.enums import (
    AidStatus,
    AppointmentCategory,
    AppointmentPriority,
    AppointmentStatus,
    CasePriority,
    CaseStatus,
    CaseType,
    CompanyType,
    CSRStatus,
    DarshanType,
    DisbursementMode,
    DisputeCategory,
    DisputeStatus,
    DueDiligenceStatus,
    EducationType,
    EmergencyStatus,
    EmergencyType,
    FundingModel,
    Gender,
    InstitutionType,
    MeetingPlace,
    MilestoneStatus,
    Priority,
    ProgramStatus,
    ProgramType,
    ProjectCategory,
    ReliefType,
    RiskLevel,
    SlaStatus,
    SupportType,
    TempleStatus,
    Urgency,
    UserRole,
    VerificationStatus,
)

T = TypeVar("T")


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Envelopes
class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T


class PageEnvelope(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: Pagination


# Audit trail
class UserSummary(ORMModel):
    id: int
    username: str
    first_name: str
    last_name: str
    role: UserRole


class StatusHistoryEntryResponse(ORMModel):
    id: int
    status: str
    changed_by_id: Optional[int] = None
    changed_at: datetime
    comments: Optional[str] = None


class CommentResponse(ORMModel):
    id: int
    text: str
    author_id: Optional[int] = None
    created_at: datetime


class AuditableResponse(ORMModel):
    id: int
    human_id: str
    assigned_to_id: Optional[int] = None
    assigned_to: Optional[UserSummary] = None
    assigned_at: Optional[datetime] = None
    assignment_notes: Optional[str] = None
    created_by_id: Optional[int] = None
    status_history: List[StatusHistoryEntryResponse] = []
    comments: List[CommentResponse] = []
    created_at: datetime
    updated_at: datetime


class UpdateBase(BaseModel):
    status_comment: Optional[str] = None


def partial_model(base: Type[BaseModel], name: str, status_enum) -> Type[BaseModel]:
    """Every field of `base` made optional, plus `status` and `status_comment`."""
    fields: Dict[str, Any] = {
        field_name: (Optional[field.annotation], None)
        for field_name, field in base.model_fields.items()
    }
    fields["status"] = (Optional[status_enum], None)
    return create_model(name, __base__=UpdateBase, **fields)


# Shared nested groups
class Attachment(BaseModel):
    filename: Optional[str] = None
    original_name: Optional[str] = None
    path: Optional[str] = None
    mimetype: Optional[str] = None
    size: Optional[int] = None
    uploaded_at: Optional[datetime] = None


class BankDetails(BaseModel):
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    bank_name: Optional[str] = None
    branch_name: Optional[str] = None
    account_holder_name: Optional[str] = None


class DisbursementDetails(BaseModel):
    mode: Optional[DisbursementMode] = None
    transaction_id: Optional[str] = None
    disbursed_amount: Optional[float] = None
    disbursed_date: Optional[datetime] = None
    cheque_number: Optional[str] = None
    disbursed_by: Optional[int] = None


class ApprovalDetails(BaseModel):
    approved_by: Optional[int] = None
    approval_date: Optional[datetime] = None
    approval_notes: Optional[str] = None
    sanction_order_number: Optional[str] = None


class ApplicantFields(BaseModel):
    applicant_name: str = Field(..., min_length=1)
    mobile: str = Field(..., min_length=1)
    email: Optional[str] = None
    aadhaar_number: Optional[str] = None
    address: Optional[str] = None


class RegionFields(BaseModel):
    district: Optional[str] = None
    mandal: Optional[str] = None
    ward: Optional[str] = None
    pincode: Optional[str] = None


# CM relief
class MedicalDetails(BaseModel):
    hospital_name: Optional[str] = None
    disease: Optional[str] = None
    treatment_cost: Optional[float] = None
    doctor_name: Optional[str] = None
    admission_date: Optional[datetime] = None


class IncomeDetails(BaseModel):
    monthly_income: Optional[float] = None
    occupation: Optional[str] = None
    family_members: Optional[int] = None
    dependents: Optional[int] = None


class CMReliefCreate(ApplicantFields, RegionFields):
    father_or_husband_name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[Gender] = None
    relief_type: ReliefType
    requested_amount: float = Field(..., ge=0)
    purpose: Optional[str] = None
    urgency: Urgency = Urgency.MEDIUM
    priority: Priority = Priority.MEDIUM
    medical_details: Optional[MedicalDetails] = None
    income_details: Optional[IncomeDetails] = None
    bank_details: Optional[BankDetails] = None
    attachments: Optional[List[Attachment]] = None


class CMReliefFields(CMReliefCreate):
    approved_amount: Optional[float] = None
    verification_status: VerificationStatus = VerificationStatus.PENDING
    verified_by_id: Optional[int] = None
    verification_date: Optional[datetime] = None
    verification_notes: Optional[str] = None
    disbursement_details: Optional[DisbursementDetails] = None
    approval_details: Optional[ApprovalDetails] = None
    reject_reason: Optional[str] = None


class CMReliefResponse(CMReliefFields, AuditableResponse):
    status: AidStatus


CMReliefUpdate = partial_model(CMReliefFields, "CMReliefUpdate", AidStatus)


# Education aid
class AcademicPerformance(BaseModel):
    last_exam_percentage: Optional[float] = None
    last_exam_grade: Optional[str] = None
    attendance: Optional[float] = None


class FamilyIncome(BaseModel):
    annual_income: Optional[float] = None
    father_occupation: Optional[str] = None
    mother_occupation: Optional[str] = None
    family_members: Optional[int] = None


class EducationAidCreate(RegionFields):
    student_name: str = Field(..., min_length=1)
    father_or_guardian_name: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[Gender] = None
    mobile: str = Field(..., min_length=1)
    email: Optional[str] = None
    aadhaar_number: Optional[str] = None
    address: Optional[str] = None
    education_type: EducationType
    current_class: Optional[str] = None
    institution_name: str = Field(..., min_length=1)
    institution_type: Optional[InstitutionType] = None
    course_or_stream: Optional[str] = None
    academic_year: Optional[str] = None
    roll_number: Optional[str] = None
    support_type: SupportType
    requested_amount: float = Field(..., ge=0)
    purpose: Optional[str] = None
    urgency: Urgency = Urgency.MEDIUM
    priority: Priority = Priority.MEDIUM
    academic_performance: Optional[AcademicPerformance] = None
    family_income: Optional[FamilyIncome] = None
    bank_details: Optional[BankDetails] = None
    attachments: Optional[List[Attachment]] = None


class EducationAidFields(EducationAidCreate):
    approved_amount: Optional[float] = None
    verification_status: VerificationStatus = VerificationStatus.PENDING
    verified_by_id: Optional[int] = None
    verification_date: Optional[datetime] = None
    verification_notes: Optional[str] = None
    disbursement_details: Optional[DisbursementDetails] = None
    approval_details: Optional[ApprovalDetails] = None
    reject_reason: Optional[str] = None


class EducationAidResponse(EducationAidFields, AuditableResponse):
    status: AidStatus


EducationAidUpdate = partial_model(EducationAidFields, "EducationAidUpdate", AidStatus)


# Temple letters
class TempleLetterCreate(ApplicantFields, RegionFields):
    temple_name: str = Field(..., min_length=1)
    darshan_type: DarshanType
    preferred_date: datetime
    number_of_people: int = Field(1, ge=1)
    purpose: Optional[str] = None
    remarks: Optional[str] = None
    attachments: Optional[List[Attachment]] = None
    tags: Optional[List[str]] = None


class TempleLetterFields(TempleLetterCreate):
    quota_available: Optional[int] = None
    quota_allocated: Optional[int] = None
    letter_number: Optional[str] = None
    letter_issued_date: Optional[datetime] = None
    letter_valid_until: Optional[datetime] = None
    reject_reason: Optional[str] = None


class TempleLetterResponse(TempleLetterFields, AuditableResponse):
    status: TempleStatus


TempleLetterUpdate = partial_model(TempleLetterFields, "TempleLetterUpdate", TempleStatus)


# Disputes
class Party(BaseModel):
    name: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)
    email: Optional[str] = None
    address: Optional[str] = None


class SlaDetails(BaseModel):
    duration: Optional[str] = None
    due_date: Optional[datetime] = None
    status: SlaStatus = SlaStatus.WITHIN_SLA
    breached_at: Optional[datetime] = None


class DisputeCreate(RegionFields):
    party_a: Party
    party_b: Party
    category: DisputeCategory
    description: str = Field(..., min_length=1)
    incident_date: Optional[datetime] = None
    incident_place: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    sla: Optional[SlaDetails] = None
    attachments: Optional[List[Attachment]] = None
    tags: Optional[List[str]] = None


class DisputeFields(DisputeCreate):
    mediator_id: Optional[int] = None
    hearing_date: Optional[datetime] = None
    hearing_time: Optional[str] = None
    hearing_place: Optional[str] = None
    hearing_notes: Optional[str] = None
    mediation_notes: Optional[str] = None
    settlement_terms: Optional[str] = None
    settlement_date: Optional[datetime] = None


class DisputeResponse(DisputeFields, AuditableResponse):
    status: DisputeStatus


DisputeUpdate = partial_model(DisputeFields, "DisputeUpdate", DisputeStatus)


# Appointments
class Attendee(BaseModel):
    name: str
    designation: Optional[str] = None
    contact: Optional[str] = None


class ActionItem(BaseModel):
    task: str
    assigned_to: Optional[int] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = "PENDING"


class AppointmentCreate(ApplicantFields, RegionFields):
    father_or_husband_name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[Gender] = None
    purpose: str = Field(..., min_length=1)
    category: AppointmentCategory = AppointmentCategory.GENERAL_MEETING
    detailed_description: Optional[str] = None
    urgency: Urgency = Urgency.MEDIUM
    preferred_date: Optional[datetime] = None
    preferred_time: Optional[str] = None
    alternative_date: Optional[datetime] = None
    alternative_time: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1)
    attendees: Optional[List[Attendee]] = None
    agenda: Optional[str] = None
    priority: AppointmentPriority = AppointmentPriority.MEDIUM
    is_vip: bool = False
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


class AppointmentFields(AppointmentCreate):
    confirmed_date: Optional[datetime] = None
    confirmed_time: Optional[str] = None
    confirmed_slot: Optional[datetime] = None
    meeting_place: Optional[MeetingPlace] = None
    specific_location: Optional[str] = None
    meeting_room: Optional[str] = None
    coordinator_id: Optional[int] = None
    meeting_notes: Optional[str] = None
    action_items: Optional[List[ActionItem]] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    actual_duration: Optional[int] = None
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None
    follow_up_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    cancellation_reason: Optional[str] = None
    confirmation_sent: bool = False
    confirmation_sent_date: Optional[datetime] = None


class AppointmentResponse(AppointmentFields, AuditableResponse):
    status: AppointmentStatus


AppointmentUpdate = partial_model(AppointmentFields, "AppointmentUpdate", AppointmentStatus)


# CSR industrial projects
class Milestone(BaseModel):
    milestone_id: str
    title: str
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    amount: Optional[float] = None
    status: MilestoneStatus = MilestoneStatus.PENDING
    notes: Optional[str] = None


class CSRProjectCreate(BaseModel):
    company_name: str = Field(..., min_length=1)
    company_type: Optional[CompanyType] = None
    cin_number: Optional[str] = None
    pan_number: Optional[str] = None
    gst_number: Optional[str] = None
    company_address: Optional[str] = None
    industry: Optional[str] = None
    contact_person_name: str = Field(..., min_length=1)
    contact_designation: Optional[str] = None
    contact_mobile: str = Field(..., min_length=1)
    contact_email: Optional[str] = None
    project_name: str = Field(..., min_length=1)
    project_category: Optional[ProjectCategory] = None
    project_description: Optional[str] = None
    project_objectives: Optional[str] = None
    target_beneficiaries: Optional[str] = None
    expected_outcomes: Optional[str] = None
    district: Optional[str] = None
    mandal: Optional[str] = None
    village: Optional[str] = None
    implementation_area: Optional[str] = None
    proposed_budget: float = Field(..., ge=0)
    funding_model: Optional[FundingModel] = None
    budget_breakdown: Optional[Dict[str, float]] = None
    proposed_start_date: Optional[datetime] = None
    proposed_end_date: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=1)
    priority: Urgency = Urgency.MEDIUM
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


class CSRProjectFields(CSRProjectCreate):
    approved_budget: Optional[float] = None
    actual_start_date: Optional[datetime] = None
    actual_end_date: Optional[datetime] = None
    mou_signed_date: Optional[datetime] = None
    mou_valid_upto: Optional[datetime] = None
    milestones: Optional[List[Milestone]] = None
    progress_percentage: int = Field(0, ge=0, le=100)
    progress_notes: Optional[str] = None
    beneficiaries_reached: Optional[int] = None
    impact_metrics: Optional[Dict[str, Any]] = None
    due_diligence_status: DueDiligenceStatus = DueDiligenceStatus.PENDING
    due_diligence_notes: Optional[str] = None
    risk_assessment: Optional[RiskLevel] = None
    approved_by_id: Optional[int] = None
    approved_date: Optional[datetime] = None


class CSRProjectResponse(CSRProjectFields, AuditableResponse):
    status: CSRStatus


CSRProjectUpdate = partial_model(CSRProjectFields, "CSRProjectUpdate", CSRStatus)


# Public programs
class Coordinator(BaseModel):
    name: Optional[str] = None
    designation: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None


class TeamMember(BaseModel):
    name: str = Field(..., min_length=1)
    role: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    responsibilities: Optional[str] = None


class FeedbackEntry(BaseModel):
    participant_name: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    comments: Optional[str] = None
    submitted_at: Optional[datetime] = None


class ProgramCreate(BaseModel):
    event_name: str = Field(..., min_length=1)
    type: ProgramType = ProgramType.PROGRAM
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    registration_start_date: Optional[datetime] = None
    registration_end_date: Optional[datetime] = None
    venue: str = Field(..., min_length=1)
    venue_address: Optional[str] = None
    venue_city: Optional[str] = None
    district: Optional[str] = None
    state: str = "Andhra Pradesh"
    venue_capacity: Optional[int] = None
    partners: Optional[List[Dict[str, Any]]] = None
    organizing_department: Optional[str] = None
    coordinator: Optional[Coordinator] = None
    target_participants: Optional[int] = None
    registration_fee: float = 0
    is_registration_required: bool = True
    registration_link: Optional[str] = None
    job_mela_details: Optional[Dict[str, Any]] = None
    program_details: Optional[Dict[str, Any]] = None
    budget: Optional[Dict[str, Any]] = None
    priority: Urgency = Urgency.MEDIUM
    is_public: bool = True
    is_featured: bool = False
    tags: Optional[List[str]] = None
    reference_number: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


class ProgramFields(ProgramCreate):
    registrations: int = 0
    actual_participants: int = 0
    statistics: Optional[Dict[str, Any]] = None
    team_members: Optional[List[TeamMember]] = None
    feedback: Optional[List[FeedbackEntry]] = None
    approved_by_id: Optional[int] = None
    approved_date: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    postponement_reason: Optional[str] = None
    new_scheduled_date: Optional[datetime] = None
    follow_up_required: bool = True
    follow_up_notes: Optional[str] = None
    internal_notes: Optional[str] = None


class ProgramResponse(ProgramFields, AuditableResponse):
    status: ProgramStatus


ProgramUpdate = partial_model(ProgramFields, "ProgramUpdate", ProgramStatus)


# Emergencies
class GpsCoordinates(BaseModel):
    latitude: float
    longitude: float


class EmergencyCreate(ApplicantFields, RegionFields):
    emergency_type: EmergencyType
    location: str = Field(..., min_length=1)
    gps_coordinates: Optional[GpsCoordinates] = None
    description: str = Field(..., min_length=1)
    urgency: Urgency = Urgency.HIGH
    landmark: Optional[str] = None
    priority: Urgency = Urgency.HIGH
    number_of_people_affected: Optional[int] = None
    estimated_damage: Optional[str] = None
    notes: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


class EmergencyFields(EmergencyCreate):
    officer_contact: Optional[str] = None
    responder_name: Optional[str] = None
    responder_contact: Optional[str] = None
    action_taken: Optional[str] = None
    response_time: Optional[datetime] = None
    resolution_time: Optional[datetime] = None
    immediate_needs_provided: Optional[str] = None
    follow_up_required: bool = False
    follow_up_details: Optional[str] = None
    internal_notes: Optional[str] = None
    escalated: bool = False
    escalated_to_id: Optional[int] = None
    escalation_reason: Optional[str] = None
    escalation_date: Optional[datetime] = None
    closure_notes: Optional[str] = None
    closed_by_id: Optional[int] = None
    closed_at: Optional[datetime] = None


class EmergencyResponse(EmergencyFields, AuditableResponse):
    status: EmergencyStatus


EmergencyUpdate = partial_model(EmergencyFields, "EmergencyUpdate", EmergencyStatus)


# Unified case inbox
class CitizenContact(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class CaseCreate(RegionFields):
    case_type: CaseType
    citizen_name: str = Field(..., min_length=1)
    citizen_contact: Optional[CitizenContact] = None
    subject: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    reason: Optional[str] = None
    place: Optional[str] = None
    time: Optional[datetime] = None
    category: Optional[str] = None
    mobile: Optional[str] = None
    party_a: Optional[str] = None
    party_b: Optional[str] = None
    dispute_category: Optional[str] = None
    applicant_name: Optional[str] = None
    temple_reference: Optional[str] = None
    darshan_type: Optional[str] = None
    preferred_date: Optional[datetime] = None
    patient_name: Optional[str] = None
    ailment: Optional[str] = None
    hospital_name: Optional[str] = None
    estimated_amount: Optional[float] = None
    student_name: Optional[str] = None
    course_details: Optional[str] = None
    institution_name: Optional[str] = None
    company_name: Optional[str] = None
    project_title: Optional[str] = None
    proposed_budget: Optional[float] = None
    appointment_date: Optional[datetime] = None
    appointment_time: Optional[str] = None
    purpose_of_visit: Optional[str] = None
    program_type: Optional[str] = None
    venue: Optional[str] = None
    expected_attendees: Optional[int] = None
    priority: CasePriority = CasePriority.P3
    department: str = "General"
    sla_duration: Optional[str] = Field(None, pattern=r"^\s*\d+\s*[hdHD]\s*$")
    attachments: Optional[List[Attachment]] = None
    tags: Optional[List[str]] = None


class CaseFields(CaseCreate):
    sla_due_date: Optional[datetime] = None
    sla_status: SlaStatus = SlaStatus.WITHIN_SLA
    sla_breached_at: Optional[datetime] = None


class CaseResponse(CaseFields, AuditableResponse):
    status: CaseStatus


CaseUpdate = partial_model(CaseFields, "CaseUpdate", CaseStatus)


# Actions shared by every type
class StatusChange(BaseModel):
    status: str = Field(..., min_length=1)
    comments: Optional[str] = None
    notes: Optional[str] = None
    changed_by: Optional[int] = None
    # Recorded by types that carry them (emergencies)
    action_taken: Optional[str] = None
    closure_notes: Optional[str] = None


class AssignRequest(BaseModel):
    assigned_to: Optional[int] = None
    notes: Optional[str] = None
    priority: Optional[str] = None
    coordinator_id: Optional[int] = None


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1)
    author: Optional[int] = None


# Workflow actions
class AppointmentConfirm(BaseModel):
    confirmed_date: datetime
    confirmed_time: str = Field(..., pattern=r"^\d{1,2}:\d{2}$")
    meeting_place: MeetingPlace
    specific_location: Optional[str] = None
    meeting_room: Optional[str] = None
    coordinator_id: Optional[int] = None
    comments: Optional[str] = None


class AppointmentCheckIn(BaseModel):
    check_in_time: Optional[datetime] = None
    comments: Optional[str] = None


class MilestoneCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    amount: Optional[float] = None
    status: MilestoneStatus = MilestoneStatus.PENDING
    notes: Optional[str] = None


class MilestoneUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    amount: Optional[float] = None
    status: Optional[MilestoneStatus] = None
    notes: Optional[str] = None


class EscalateRequest(BaseModel):
    escalated_to: Optional[int] = None
    reason: str = Field(..., min_length=1)


class HearingRequest(BaseModel):
    hearing_date: datetime
    hearing_time: Optional[str] = None
    hearing_place: Optional[str] = None
    hearing_notes: Optional[str] = None
    mediator: Optional[int] = None


# Users
class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone_number: Optional[str] = None
    role: UserRole = UserRole.L3_CITIZEN
    department: Optional[str] = None
    designation: Optional[str] = None
    district: Optional[str] = None


class UserUpdate(BaseModel):
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = None
    role: Optional[UserRole] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    district: Optional[str] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None
    preferences: Optional[Dict[str, Any]] = None


class UserResponse(ORMModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone_number: Optional[str] = None
    role: UserRole
    department: Optional[str] = None
    designation: Optional[str] = None
    district: Optional[str] = None
    is_active: bool
    is_verified: bool
    preferences: Optional[Dict[str, Any]] = None
    last_login: Optional[datetime] = None
    login_count: int = 0
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class LoginResult(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
