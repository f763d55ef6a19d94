from enum import Enum


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEW_SCHEDULED = "Interview Scheduled"
    TECHNICAL_ROUND = "Technical Round"
    HR_ROUND = "HR Round"
    FINAL_ROUND = "Final Round"
    OFFER_RECEIVED = "Offer Received"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


class PositionType(str, Enum):
    INTERNSHIP = "Internship"
    FULL_TIME = "Full-time"
    CONTRACT = "Contract"
    LEADS_TO_FULL_TIME = "Leads to Full Time"


class ConnectionStatus(str, Enum):
    NONE = "none"  # no row for the pair; never persisted
    PENDING = "pending"
    ACCEPTED = "accepted"


class ConnectionAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


# Single source for the calendar title and notification label of a record.
ACTION_LABELS: dict[ApplicationStatus, str] = {
    ApplicationStatus.APPLIED: "Follow up",
    ApplicationStatus.INTERVIEW_SCHEDULED: "Interview",
    ApplicationStatus.TECHNICAL_ROUND: "Technical Interview",
    ApplicationStatus.HR_ROUND: "HR Interview",
    ApplicationStatus.FINAL_ROUND: "Final Interview",
    ApplicationStatus.OFFER_RECEIVED: "Respond to Offer",
}
DEFAULT_ACTION_LABEL = "Next Action"

# Statuses that close an application for the "active" count.
CLOSED_STATUSES = frozenset({ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN})

# Loose spellings accepted on input, keyed by lowercased, trimmed text.
STATUS_ALIASES: dict[str, ApplicationStatus] = {
    "applied": ApplicationStatus.APPLIED,
    "interview": ApplicationStatus.INTERVIEW_SCHEDULED,
    "interview scheduled": ApplicationStatus.INTERVIEW_SCHEDULED,
    "technical": ApplicationStatus.TECHNICAL_ROUND,
    "technical round": ApplicationStatus.TECHNICAL_ROUND,
    "hr": ApplicationStatus.HR_ROUND,
    "hr round": ApplicationStatus.HR_ROUND,
    "final": ApplicationStatus.FINAL_ROUND,
    "final round": ApplicationStatus.FINAL_ROUND,
    "offer": ApplicationStatus.OFFER_RECEIVED,
    "offer received": ApplicationStatus.OFFER_RECEIVED,
    "rejected": ApplicationStatus.REJECTED,
    "withdrawn": ApplicationStatus.WITHDRAWN,
}

POSITION_TYPE_ALIASES: dict[str, PositionType] = {
    "internship": PositionType.INTERNSHIP,
    "intern": PositionType.INTERNSHIP,
    "fulltime": PositionType.FULL_TIME,
    "full-time": PositionType.FULL_TIME,
    "full time": PositionType.FULL_TIME,
    "contract": PositionType.CONTRACT,
    "contractor": PositionType.CONTRACT,
    "leadstofulltime": PositionType.LEADS_TO_FULL_TIME,
    "leads to full time": PositionType.LEADS_TO_FULL_TIME,
    "leads-to-full-time": PositionType.LEADS_TO_FULL_TIME,
}


def action_label_for(status: str | ApplicationStatus | None) -> str:
    try:
        return ACTION_LABELS.get(ApplicationStatus(status), DEFAULT_ACTION_LABEL)
    except ValueError:
        return DEFAULT_ACTION_LABEL


def coerce_status(value: str) -> ApplicationStatus:
    """Map loose input ("interview", "OFFER") onto a status; ValueError if unknown."""
    # Custom free-text statuses are rejected; only known statuses and their aliases are stored.
    if isinstance(value, ApplicationStatus):
        return value
    key = str(value).strip().lower()
    if key in STATUS_ALIASES:
        return STATUS_ALIASES[key]
    raise ValueError(f"Unknown application status: {value!r}")


def coerce_position_type(value: str) -> PositionType:
    if isinstance(value, PositionType):
        return value
    key = str(value).strip().lower()
    if key in POSITION_TYPE_ALIASES:
        return POSITION_TYPE_ALIASES[key]
    raise ValueError(f"Unknown position type: {value!r}")
