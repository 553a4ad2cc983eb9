"""Domain enumerations"""
import enum


class DecisionState(str, enum.Enum):
    """Decision lifecycle states"""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"  # Derived for display only, never stored
    COMMITTED = "COMMITTED"
    RESOLVED = "RESOLVED"
    ARCHIVED = "ARCHIVED"  # Reserved, no operation sets it


class PersonaStyle(str, enum.Enum):
    """Tone used by simulation prompts"""
    ANALYTICAL = "analytical"
    EMPATHETIC = "empathetic"


class MessageSender(str, enum.Enum):
    """Author of a conversation message"""
    USER = "user"
    FUTURE_YOU = "future-you"
    SYSTEM = "system"


class EventType(str, enum.Enum):
    """Audit event types"""
    METRIC = "METRIC"
    STATE_TRANSITION = "STATE_TRANSITION"


class Table(str, enum.Enum):
    """Document store tables"""
    DECISIONS = "decisions"
    BRANCHES = "branches"
    CONVERSATIONS = "conversations"
    COMPARISONS = "comparisons"
    DECISION_GROUPS = "decision_groups"
    EVENTS = "events"
