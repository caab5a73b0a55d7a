"""
Domain models - the nine citizen-service record types.

Every model composes AuditableMixin for human_id, status history, comments and
assignment. Filterable and summable fields are real columns; nested groups
(bank details, parties, milestones, attachments...) are JSON columns.
"""
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)

from sahaya_api.database import Base
from sahaya_api.models.audit import AuditableMixin
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
    Priority,
    ProjectCategory,
    ProgramStatus,
    ProgramType,
    ReliefType,
    RiskLevel,
    SlaStatus,
    SupportType,
    TempleStatus,
    Urgency,
    VerificationStatus,
)


def user_ref(**kwargs):
    return Column(Integer, ForeignKey("users.id"), nullable=True, **kwargs)


class RegionMixin:
    district = Column(String, nullable=True, index=True)
    mandal = Column(String, nullable=True)
    ward = Column(String, nullable=True)
    pincode = Column(String, nullable=True)


class ApplicantMixin:
    """Contact block shared by citizen-filed requests."""
    applicant_name = Column(String, nullable=False)
    mobile = Column(String, nullable=False)
    email = Column(String, nullable=True)
    aadhaar_number = Column(String, nullable=True)
    address = Column(String, nullable=True)


class CMRelief(AuditableMixin, ApplicantMixin, RegionMixin, Base):
    """
    Chief Minister's Relief Fund request.

    REQUESTED → UNDER_REVIEW → VERIFICATION_PENDING → APPROVED/REJECTED →
    AMOUNT_DISBURSED → COMPLETED (or CANCELLED).
    """
    __tablename__ = "cm_relief_requests"

    father_or_husband_name = Column(String, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(SQLEnum(Gender), nullable=True)

    relief_type = Column(SQLEnum(ReliefType), nullable=False, index=True)
    requested_amount = Column(Float, nullable=False)
    approved_amount = Column(Float, nullable=True)
    purpose = Column(Text, nullable=True)
    urgency = Column(SQLEnum(Urgency), nullable=False, default=Urgency.MEDIUM)
    priority = Column(SQLEnum(Priority), nullable=False, default=Priority.MEDIUM)

    medical_details = Column(JSON, nullable=True)
    income_details = Column(JSON, nullable=True)
    bank_details = Column(JSON, nullable=True)

    verification_status = Column(
        SQLEnum(VerificationStatus), nullable=False, default=VerificationStatus.PENDING
    )
    verified_by_id = user_ref()
    verification_date = Column(DateTime, nullable=True)
    verification_notes = Column(Text, nullable=True)

    disbursement_details = Column(JSON, nullable=True)
    approval_details = Column(JSON, nullable=True)
    reject_reason = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)

    status = Column(SQLEnum(AidStatus), nullable=False, default=AidStatus.REQUESTED, index=True)


class EducationAid(AuditableMixin, RegionMixin, Base):
    """Education support request (fees, books, laptops, scholarships)."""
    __tablename__ = "education_requests"

    student_name = Column(String, nullable=False)
    father_or_guardian_name = Column(String, nullable=True)
    date_of_birth = Column(DateTime, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(SQLEnum(Gender), nullable=True)
    mobile = Column(String, nullable=False)
    email = Column(String, nullable=True)
    aadhaar_number = Column(String, nullable=True)
    address = Column(String, nullable=True)

    education_type = Column(SQLEnum(EducationType), nullable=False, index=True)
    current_class = Column(String, nullable=True)
    institution_name = Column(String, nullable=False)
    institution_type = Column(SQLEnum(InstitutionType), nullable=True)
    course_or_stream = Column(String, nullable=True)
    academic_year = Column(String, nullable=True)
    roll_number = Column(String, nullable=True)

    support_type = Column(SQLEnum(SupportType), nullable=False, index=True)
    requested_amount = Column(Float, nullable=False)
    approved_amount = Column(Float, nullable=True)
    purpose = Column(Text, nullable=True)
    urgency = Column(SQLEnum(Urgency), nullable=False, default=Urgency.MEDIUM)
    priority = Column(SQLEnum(Priority), nullable=False, default=Priority.MEDIUM)

    academic_performance = Column(JSON, nullable=True)
    family_income = Column(JSON, nullable=True)
    bank_details = Column(JSON, nullable=True)

    verification_status = Column(
        SQLEnum(VerificationStatus), nullable=False, default=VerificationStatus.PENDING
    )
    verified_by_id = user_ref()
    verification_date = Column(DateTime, nullable=True)
    verification_notes = Column(Text, nullable=True)

    disbursement_details = Column(JSON, nullable=True)
    approval_details = Column(JSON, nullable=True)
    reject_reason = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)

    status = Column(SQLEnum(AidStatus), nullable=False, default=AidStatus.REQUESTED, index=True)


class TempleLetter(AuditableMixin, ApplicantMixin, RegionMixin, Base):
    """Darshan recommendation letter for a temple visit."""
    __tablename__ = "temple_letters"

    temple_name = Column(String, nullable=False, index=True)
    darshan_type = Column(SQLEnum(DarshanType), nullable=False)
    preferred_date = Column(DateTime, nullable=False, index=True)
    number_of_people = Column(Integer, nullable=False, default=1)

    quota_available = Column(Integer, nullable=True)
    quota_allocated = Column(Integer, nullable=True)

    letter_number = Column(String, nullable=True)
    letter_issued_date = Column(DateTime, nullable=True)
    letter_valid_until = Column(DateTime, nullable=True)

    purpose = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
    reject_reason = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)

    status = Column(SQLEnum(TempleStatus), nullable=False, default=TempleStatus.REQUESTED, index=True)


class Dispute(AuditableMixin, RegionMixin, Base):
    """
    A two-party dispute brought for mediation.

    Scheduling a hearing moves the dispute to MEDIATION_SCHEDULED.
    """
    __tablename__ = "disputes"

    party_a = Column(JSON, nullable=False)  # {name, contact, email, address}
    party_b = Column(JSON, nullable=False)
    category = Column(SQLEnum(DisputeCategory), nullable=False, index=True)
    description = Column(Text, nullable=False)
    incident_date = Column(DateTime, nullable=True)
    incident_place = Column(String, nullable=True)

    mediator_id = user_ref(index=True)
    hearing_date = Column(DateTime, nullable=True, index=True)
    hearing_time = Column(String, nullable=True)
    hearing_place = Column(String, nullable=True)
    hearing_notes = Column(Text, nullable=True)

    sla = Column(JSON, nullable=True)  # {duration, due_date, status, breached_at}

    mediation_notes = Column(Text, nullable=True)
    settlement_terms = Column(Text, nullable=True)
    settlement_date = Column(DateTime, nullable=True)
    priority = Column(SQLEnum(Priority), nullable=False, default=Priority.MEDIUM)
    attachments = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)

    status = Column(SQLEnum(DisputeStatus), nullable=False, default=DisputeStatus.NEW, index=True)


class Appointment(AuditableMixin, ApplicantMixin, RegionMixin, Base):
    """Request for a meeting with an official."""
    __tablename__ = "appointments"

    father_or_husband_name = Column(String, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(SQLEnum(Gender), nullable=True)

    purpose = Column(Text, nullable=False)
    category = Column(
        SQLEnum(AppointmentCategory), nullable=False, default=AppointmentCategory.GENERAL_MEETING, index=True
    )
    detailed_description = Column(Text, nullable=True)
    urgency = Column(SQLEnum(Urgency), nullable=False, default=Urgency.MEDIUM)

    # Preferred schedule
    preferred_date = Column(DateTime, nullable=True)
    preferred_time = Column(String, nullable=True)
    alternative_date = Column(DateTime, nullable=True)
    alternative_time = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)  # minutes

    # Confirmed schedule
    confirmed_date = Column(DateTime, nullable=True, index=True)
    confirmed_time = Column(String, nullable=True)
    confirmed_slot = Column(DateTime, nullable=True)
    meeting_place = Column(SQLEnum(MeetingPlace), nullable=True)
    specific_location = Column(String, nullable=True)
    meeting_room = Column(String, nullable=True)
    coordinator_id = user_ref()

    attendees = Column(JSON, nullable=True)
    agenda = Column(Text, nullable=True)
    meeting_notes = Column(Text, nullable=True)
    action_items = Column(JSON, nullable=True)

    check_in_time = Column(DateTime, nullable=True)
    check_out_time = Column(DateTime, nullable=True)
    actual_duration = Column(Integer, nullable=True)

    follow_up_required = Column(Boolean, nullable=False, default=False)
    follow_up_date = Column(DateTime, nullable=True)
    follow_up_notes = Column(Text, nullable=True)

    rejection_reason = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    confirmation_sent = Column(Boolean, nullable=False, default=False)
    confirmation_sent_date = Column(DateTime, nullable=True)

    priority = Column(SQLEnum(AppointmentPriority), nullable=False, default=AppointmentPriority.MEDIUM)
    is_vip = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)

    status = Column(
        SQLEnum(AppointmentStatus), nullable=False, default=AppointmentStatus.REQUESTED, index=True
    )


class CSRProject(AuditableMixin, Base):
    """Corporate social responsibility project brought in from industry."""
    __tablename__ = "csr_projects"

    company_name = Column(String, nullable=False, index=True)
    company_type = Column(SQLEnum(CompanyType), nullable=True)
    cin_number = Column(String, nullable=True)
    pan_number = Column(String, nullable=True)
    gst_number = Column(String, nullable=True)
    company_address = Column(String, nullable=True)
    industry = Column(String, nullable=True)

    contact_person_name = Column(String, nullable=False)
    contact_designation = Column(String, nullable=True)
    contact_mobile = Column(String, nullable=False)
    contact_email = Column(String, nullable=True)

    project_name = Column(String, nullable=False)
    project_category = Column(SQLEnum(ProjectCategory), nullable=True, index=True)
    project_description = Column(Text, nullable=True)
    project_objectives = Column(Text, nullable=True)
    target_beneficiaries = Column(Text, nullable=True)
    expected_outcomes = Column(Text, nullable=True)

    district = Column(String, nullable=True, index=True)
    mandal = Column(String, nullable=True)
    village = Column(String, nullable=True)
    implementation_area = Column(String, nullable=True)

    proposed_budget = Column(Float, nullable=False)
    approved_budget = Column(Float, nullable=True)
    funding_model = Column(SQLEnum(FundingModel), nullable=True)
    budget_breakdown = Column(JSON, nullable=True)

    proposed_start_date = Column(DateTime, nullable=True)
    proposed_end_date = Column(DateTime, nullable=True)
    actual_start_date = Column(DateTime, nullable=True)
    actual_end_date = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)  # months
    mou_signed_date = Column(DateTime, nullable=True)
    mou_valid_upto = Column(DateTime, nullable=True)

    milestones = Column(JSON, nullable=True)
    progress_percentage = Column(Integer, nullable=False, default=0)
    progress_notes = Column(Text, nullable=True)
    beneficiaries_reached = Column(Integer, nullable=True)
    impact_metrics = Column(JSON, nullable=True)

    due_diligence_status = Column(
        SQLEnum(DueDiligenceStatus), nullable=False, default=DueDiligenceStatus.PENDING
    )
    due_diligence_notes = Column(Text, nullable=True)
    risk_assessment = Column(SQLEnum(RiskLevel), nullable=True)

    approved_by_id = user_ref()
    approved_date = Column(DateTime, nullable=True)

    priority = Column(SQLEnum(Urgency), nullable=False, default=Urgency.MEDIUM)
    tags = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)

    status = Column(SQLEnum(CSRStatus), nullable=False, default=CSRStatus.LEAD, index=True)


class Program(AuditableMixin, Base):
    """Public program: job melas, trainings, workshops, seminars."""
    __tablename__ = "programs"

    event_name = Column(String, nullable=False, index=True)
    type = Column(SQLEnum(ProgramType), nullable=False, default=ProgramType.PROGRAM, index=True)
    description = Column(Text, nullable=True)

    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    registration_start_date = Column(DateTime, nullable=True)
    registration_end_date = Column(DateTime, nullable=True)

    venue = Column(String, nullable=False, index=True)
    venue_address = Column(String, nullable=True)
    venue_city = Column(String, nullable=True)
    district = Column(String, nullable=True, index=True)
    state = Column(String, nullable=False, default="Andhra Pradesh")
    venue_capacity = Column(Integer, nullable=True)

    partners = Column(JSON, nullable=True)
    organizing_department = Column(String, nullable=True)
    coordinator = Column(JSON, nullable=True)  # {name, designation, contact, email}

    registrations = Column(Integer, nullable=False, default=0)
    target_participants = Column(Integer, nullable=True)
    actual_participants = Column(Integer, nullable=False, default=0)
    registration_fee = Column(Float, nullable=False, default=0)
    is_registration_required = Column(Boolean, nullable=False, default=True)
    registration_link = Column(String, nullable=True)

    job_mela_details = Column(JSON, nullable=True)
    program_details = Column(JSON, nullable=True)
    statistics = Column(JSON, nullable=True)
    budget = Column(JSON, nullable=True)

    team_members = Column(JSON, nullable=True)
    feedback = Column(JSON, nullable=True)

    approved_by_id = user_ref()
    approved_date = Column(DateTime, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    postponement_reason = Column(Text, nullable=True)
    new_scheduled_date = Column(DateTime, nullable=True)

    follow_up_required = Column(Boolean, nullable=False, default=True)
    follow_up_notes = Column(Text, nullable=True)

    priority = Column(SQLEnum(Urgency), nullable=False, default=Urgency.MEDIUM)
    is_public = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=True)
    internal_notes = Column(Text, nullable=True)
    reference_number = Column(String, nullable=True)
    attachments = Column(JSON, nullable=True)

    status = Column(SQLEnum(ProgramStatus), nullable=False, default=ProgramStatus.PLANNED, index=True)


class Emergency(AuditableMixin, ApplicantMixin, RegionMixin, Base):
    """
    An emergency logged by a citizen or field officer.

    Invariants:
    - RESOLVED or CLOSED stamps resolution_time
    - escalation always raises priority to CRITICAL
    """
    __tablename__ = "emergencies"

    emergency_type = Column(SQLEnum(EmergencyType), nullable=False, index=True)
    location = Column(String, nullable=False)
    gps_coordinates = Column(JSON, nullable=True)  # {latitude, longitude}
    description = Column(Text, nullable=False)
    urgency = Column(SQLEnum(Urgency), nullable=False, default=Urgency.HIGH, index=True)
    landmark = Column(String, nullable=True)

    officer_contact = Column(String, nullable=True)
    responder_name = Column(String, nullable=True)
    responder_contact = Column(String, nullable=True)
    action_taken = Column(Text, nullable=True)
    response_time = Column(DateTime, nullable=True)
    resolution_time = Column(DateTime, nullable=True)

    priority = Column(SQLEnum(Urgency), nullable=False, default=Urgency.HIGH)
    number_of_people_affected = Column(Integer, nullable=True)
    estimated_damage = Column(String, nullable=True)
    immediate_needs_provided = Column(Text, nullable=True)
    follow_up_required = Column(Boolean, nullable=False, default=False)
    follow_up_details = Column(Text, nullable=True)

    notes = Column(Text, nullable=True)
    internal_notes = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)

    escalated = Column(Boolean, nullable=False, default=False)
    escalated_to_id = user_ref()
    escalation_reason = Column(Text, nullable=True)
    escalation_date = Column(DateTime, nullable=True)

    closure_notes = Column(Text, nullable=True)
    closed_by_id = user_ref()
    closed_at = Column(DateTime, nullable=True)

    status = Column(SQLEnum(EmergencyStatus), nullable=False, default=EmergencyStatus.LOGGED, index=True)


class Case(AuditableMixin, RegionMixin, Base):
    """
    Unified inbox entry: a subset of every other module's fields plus case_type.

    SLA due date is derived from sla_duration ("48h", "7d") at creation.
    """
    __tablename__ = "cases"

    case_type = Column(SQLEnum(CaseType), nullable=False, index=True)
    citizen_name = Column(String, nullable=False)
    citizen_contact = Column(JSON, nullable=True)  # {phone, email, address}

    subject = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    reason = Column(Text, nullable=True)
    place = Column(String, nullable=True)
    time = Column(DateTime, nullable=True)

    # Grievance
    category = Column(String, nullable=True)
    mobile = Column(String, nullable=True)
    # Dispute
    party_a = Column(String, nullable=True)
    party_b = Column(String, nullable=True)
    dispute_category = Column(String, nullable=True)
    # Temple
    applicant_name = Column(String, nullable=True)
    temple_reference = Column(String, nullable=True)
    darshan_type = Column(String, nullable=True)
    preferred_date = Column(DateTime, nullable=True)
    # CM relief
    patient_name = Column(String, nullable=True)
    ailment = Column(String, nullable=True)
    hospital_name = Column(String, nullable=True)
    estimated_amount = Column(Float, nullable=True)
    # Education
    student_name = Column(String, nullable=True)
    course_details = Column(String, nullable=True)
    institution_name = Column(String, nullable=True)
    # CSR
    company_name = Column(String, nullable=True)
    project_title = Column(String, nullable=True)
    proposed_budget = Column(Float, nullable=True)
    # Appointment
    appointment_date = Column(DateTime, nullable=True)
    appointment_time = Column(String, nullable=True)
    purpose_of_visit = Column(String, nullable=True)
    # Program
    program_type = Column(String, nullable=True)
    venue = Column(String, nullable=True)
    expected_attendees = Column(Integer, nullable=True)

    priority = Column(SQLEnum(CasePriority), nullable=False, default=CasePriority.P3, index=True)
    department = Column(String, nullable=False, default="General", index=True)

    sla_duration = Column(String, nullable=True)
    sla_due_date = Column(DateTime, nullable=True, index=True)
    sla_status = Column(SQLEnum(SlaStatus), nullable=False, default=SlaStatus.WITHIN_SLA)
    sla_breached_at = Column(DateTime, nullable=True)

    attachments = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)

    status = Column(SQLEnum(CaseStatus), nullable=False, default=CaseStatus.PENDING, index=True)
