"""Enums for every entity type - these define the valid values for statuses and categories."""
from enum import Enum


class UserRole(str, Enum):
    """Three access tiers; citizens by default."""
    L3_CITIZEN = "L3_CITIZEN"
    L2_EXEC_ADMIN = "L2_EXEC_ADMIN"
    L1_MASTER_ADMIN = "L1_MASTER_ADMIN"


ADMIN_ROLES = (UserRole.L1_MASTER_ADMIN.value, UserRole.L2_EXEC_ADMIN.value)


# Shared value sets
class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Urgency(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class VerificationStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class DisbursementMode(str, Enum):
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"
    CASH = "CASH"
    DD = "DD"


class AidStatus(str, Enum):
    """Lifecycle of CM relief and education aid requests."""
    REQUESTED = "REQUESTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    VERIFICATION_PENDING = "VERIFICATION_PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    AMOUNT_DISBURSED = "AMOUNT_DISBURSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# CM relief
class ReliefType(str, Enum):
    MEDICAL = "MEDICAL"
    EDUCATION = "EDUCATION"
    ACCIDENT = "ACCIDENT"
    NATURAL_DISASTER = "NATURAL_DISASTER"
    FINANCIAL_ASSISTANCE = "FINANCIAL_ASSISTANCE"
    FUNERAL = "FUNERAL"
    OTHER = "OTHER"


# Education aid
class EducationType(str, Enum):
    SCHOOL = "SCHOOL"
    INTERMEDIATE = "INTERMEDIATE"
    UNDERGRADUATE = "UNDERGRADUATE"
    POSTGRADUATE = "POSTGRADUATE"
    DIPLOMA = "DIPLOMA"
    VOCATIONAL = "VOCATIONAL"
    SKILL_TRAINING = "SKILL_TRAINING"
    OTHER = "OTHER"


class InstitutionType(str, Enum):
    GOVERNMENT = "GOVERNMENT"
    PRIVATE = "PRIVATE"
    AIDED = "AIDED"


class SupportType(str, Enum):
    TUITION_FEE = "TUITION_FEE"
    BOOKS = "BOOKS"
    UNIFORM = "UNIFORM"
    TRANSPORT = "TRANSPORT"
    HOSTEL_FEE = "HOSTEL_FEE"
    EXAM_FEE = "EXAM_FEE"
    LAPTOP = "LAPTOP"
    SCHOLARSHIP = "SCHOLARSHIP"
    OTHER = "OTHER"


# Temple letters
class DarshanType(str, Enum):
    VIP = "VIP"
    GENERAL = "GENERAL"
    SPECIAL = "SPECIAL"
    DIVYA_DARSHAN = "DIVYA_DARSHAN"
    SARVA_DARSHAN = "SARVA_DARSHAN"


class TempleStatus(str, Enum):
    REQUESTED = "REQUESTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    LETTER_ISSUED = "LETTER_ISSUED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Disputes
class DisputeCategory(str, Enum):
    LAND = "Land"
    SOCIETY = "Society"
    BENEFITS = "Benefits"
    TENANCY = "Tenancy"
    FAMILY = "Family"
    PROPERTY = "Property"
    OTHER = "Other"


class DisputeStatus(str, Enum):
    NEW = "NEW"
    UNDER_REVIEW = "UNDER_REVIEW"
    MEDIATION_SCHEDULED = "MEDIATION_SCHEDULED"
    IN_MEDIATION = "IN_MEDIATION"
    SETTLED = "SETTLED"
    REFERRED_TO_COURT = "REFERRED_TO_COURT"
    CLOSED = "CLOSED"


class SlaStatus(str, Enum):
    WITHIN_SLA = "within-sla"
    APPROACHING_BREACH = "approaching-breach"
    BREACHED = "breached"


# Appointments
class AppointmentCategory(str, Enum):
    PERSONAL_GRIEVANCE = "PERSONAL_GRIEVANCE"
    PROJECT_DISCUSSION = "PROJECT_DISCUSSION"
    COMMUNITY_ISSUE = "COMMUNITY_ISSUE"
    BUSINESS_PROPOSAL = "BUSINESS_PROPOSAL"
    GENERAL_MEETING = "GENERAL_MEETING"
    VIP_MEETING = "VIP_MEETING"
    OTHER = "OTHER"


class MeetingPlace(str, Enum):
    CHIEF_MINISTER_OFFICE = "CHIEF_MINISTER_OFFICE"
    SECRETARIAT = "SECRETARIAT"
    DISTRICT_COLLECTORATE = "DISTRICT_COLLECTORATE"
    FIELD_VISIT = "FIELD_VISIT"
    VIRTUAL_MEETING = "VIRTUAL_MEETING"
    OTHER = "OTHER"


class AppointmentPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VIP = "VIP"


class AppointmentStatus(str, Enum):
    REQUESTED = "REQUESTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    CONFIRMED = "CONFIRMED"
    RESCHEDULED = "RESCHEDULED"
    CHECKED_IN = "CHECKED_IN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"
    REJECTED = "REJECTED"


# CSR industrial projects
class CompanyType(str, Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    MNC = "MNC"
    PSU = "PSU"
    STARTUP = "STARTUP"
    NGO = "NGO"


class ProjectCategory(str, Enum):
    EDUCATION = "EDUCATION"
    HEALTHCARE = "HEALTHCARE"
    RURAL_DEVELOPMENT = "RURAL_DEVELOPMENT"
    SKILL_DEVELOPMENT = "SKILL_DEVELOPMENT"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    ENVIRONMENT = "ENVIRONMENT"
    SPORTS = "SPORTS"
    CULTURE = "CULTURE"
    DISASTER_RELIEF = "DISASTER_RELIEF"
    OTHER = "OTHER"


class FundingModel(str, Enum):
    FULL_FUNDING = "FULL_FUNDING"
    PARTIAL_FUNDING = "PARTIAL_FUNDING"
    MATCHING_GRANT = "MATCHING_GRANT"
    IN_KIND = "IN_KIND"


class MilestoneStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DELAYED = "DELAYED"


class DueDiligenceStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class CSRStatus(str, Enum):
    LEAD = "LEAD"
    DUE_DILIGENCE = "DUE_DILIGENCE"
    PROPOSAL_SENT = "PROPOSAL_SENT"
    PROPOSAL_REVIEW = "PROPOSAL_REVIEW"
    MOU_DRAFT = "MOU_DRAFT"
    MOU_SIGNED = "MOU_SIGNED"
    IN_EXECUTION = "IN_EXECUTION"
    MILESTONES_APPROVED = "MILESTONES_APPROVED"
    COMPLETED = "COMPLETED"
    CLOSED = "CLOSED"
    REJECTED = "REJECTED"


# Public programs
class ProgramType(str, Enum):
    JOB_MELA = "JOB_MELA"
    PROGRAM = "PROGRAM"
    TRAINING = "TRAINING"
    WORKSHOP = "WORKSHOP"
    SEMINAR = "SEMINAR"
    OTHER = "OTHER"


class ProgramStatus(str, Enum):
    PLANNED = "PLANNED"
    REGISTRATION = "REGISTRATION"
    REGISTRATION_CLOSED = "REGISTRATION_CLOSED"
    SCREENING = "SCREENING"
    SELECTION = "SELECTION"
    OFFER = "OFFER"
    JOINED = "JOINED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"


# Emergencies
class EmergencyType(str, Enum):
    MEDICAL = "MEDICAL"
    POLICE = "POLICE"
    FIRE = "FIRE"
    NATURAL_DISASTER = "NATURAL_DISASTER"
    ACCIDENT = "ACCIDENT"
    OTHER = "OTHER"


class EmergencyStatus(str, Enum):
    LOGGED = "LOGGED"
    DISPATCHED = "DISPATCHED"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CANCELLED = "CANCELLED"
    CLOSED = "CLOSED"


# Unified case inbox
class CaseType(str, Enum):
    GRIEVANCE = "grievance"
    DISPUTE = "dispute"
    TEMPLE = "temple"
    CMR = "cmr"
    EDUCATION = "education"
    CSR = "csr"
    APPOINTMENT = "appointment"
    PROGRAM = "program"


class CasePriority(str, Enum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


class CaseStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    UNDER_REVIEW = "under-review"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CLOSED = "closed"
