# app/models/enums.py
"""
Integer enums stored in plain `integer` columns.

The numeric values are part of the stored data and must never be renumbered.
Aliases (same value, second name) exist where older rows and callers used a
different spelling for the same state.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Type


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


class AssetCategory(IntEnum):
    DESKTOP = 0
    LAPTOP = 1
    PRINTER = 2
    SCANNER = 3
    MONITOR = 4
    KEYBOARD = 5
    MOUSE = 6
    SPEAKER = 7
    TELEVISION = 8
    NETWORK_DEVICE = 9
    SERVER = 10
    MEDICAL_DEVICE = 11
    OTHER = 12


class AssetStatus(IntEnum):
    ACTIVE = 0
    IN_USE = 1
    AVAILABLE = 2
    IN_REPAIR = 3
    UNDER_REPAIR = 4
    UNDER_MAINTENANCE = 5
    MAINTENANCE = 6
    MAINTENANCE_PENDING = 7
    RESERVED = 8
    UPGRADED = 9
    DECOMMISSIONED = 10
    RETIRED = 11
    WRITE_OFF = 12
    LOST = 13
    STOLEN = 14
    PENDING_APPROVAL = 15
    IN_TRANSIT = 16


# states an asset never leaves through normal operations
TERMINAL_ASSET_STATUSES = frozenset(
    {AssetStatus.WRITE_OFF, AssetStatus.RETIRED, AssetStatus.LOST, AssetStatus.STOLEN}
)


class MovementType(IntEnum):
    """AssetMovements.MovementType"""

    LOCATION_TRANSFER = 0
    PERSON_TRANSFER = 1
    INSTALLATION = 2
    DECOMMISSION = 3
    REPAIR = 4
    RETURN = 5


class AuditAction(IntEnum):
    CREATE = 0
    UPDATE = 1
    DELETE = 2
    MOVE = 3
    STATUS_CHANGE = 4
    ASSIGNMENT = 5
    MAINTENANCE = 6
    LOGIN = 7
    LOGOUT = 8
    ERROR = 9


# ---------------------------------------------------------------------------
# Maintenance / write-off
# ---------------------------------------------------------------------------


class MaintenanceType(IntEnum):
    PREVENTIVE_MAINTENANCE = 0
    REPAIR = 1
    UPGRADE = 2
    INSPECTION = 3
    CALIBRATION = 4
    CLEANING = 5
    OTHER = 6


class MaintenanceStatus(IntEnum):
    SCHEDULED = 0
    IN_PROGRESS = 1
    COMPLETED = 2
    CANCELLED = 3
    FAILED = 4


class WriteOffReason(IntEnum):
    END_OF_LIFE = 0
    BEYOND_REPAIR = 1
    OBSOLETE = 2
    LOST = 3
    STOLEN = 4
    DAMAGED = 5
    COMPLIANCE = 6
    UPGRADE = 7
    OTHER = 8


class WriteOffMethod(IntEnum):
    DONATION = 0
    RECYCLING = 1
    DESTRUCTION = 2
    RESALE = 3
    TRADE = 4
    OTHER = 5


class WriteOffStatus(IntEnum):
    PENDING = 0
    UNDER_REVIEW = 1
    APPROVED = 2
    REJECTED = 3
    PROCESSED = 4
    CANCELLED = 5


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


class InventoryCategory(IntEnum):
    COMPUTER = 0
    DESKTOP = 0
    LAPTOP = 1
    SERVER = 2
    NETWORK_DEVICE = 3
    PRINTER = 4
    MONITOR = 5
    PERIPHERALS = 6
    COMPONENTS = 7
    STORAGE = 8
    MEMORY = 9
    POWER_SUPPLY = 10
    CABLES = 11
    SOFTWARE = 12
    ACCESSORIES = 13
    CONSUMABLES = 14
    MEDICAL_DEVICE = 15
    TELEPHONE = 16
    AUDIO = 17
    VIDEO = 18
    SECURITY = 19
    BACKUP = 20
    OTHER = 99


class InventoryItemType(IntEnum):
    NEW = 0
    REFURBISHED = 1
    USED = 2
    SPARE = 3
    CONSUMABLE = 4
    TOOL = 5
    DEMO = 6
    LOANER = 7
    DEFECTIVE = 8
    RETURNED_FROM_SERVICE = 9


class InventoryStatus(IntEnum):
    IN_STOCK = 0
    ACTIVE = 0
    AVAILABLE = 0
    RESERVED = 1
    ALLOCATED = 2
    IN_TRANSIT = 3
    DEPLOYED = 4
    ON_LOAN = 5
    UNDER_TESTING = 6
    QUARANTINE = 7
    AWAITING_DISPOSAL = 8
    DISPOSED = 9
    LOST = 10
    STOLEN = 11
    DAMAGED = 12


class InventoryCondition(IntEnum):
    NEW = 0
    EXCELLENT = 1
    GOOD = 2
    FAIR = 3
    POOR = 4
    DEFECTIVE = 5
    FOR_REPAIR = 6
    SALVAGE = 7
    OBSOLETE = 8
    UNKNOWN = 9


class InventoryMovementType(IntEnum):
    STOCK_IN = 0
    STOCK_OUT = 1
    TRANSFER = 2
    ADJUSTMENT = 3
    RESERVATION = 4
    ALLOCATION = 5
    RETURN = 6
    DISPOSAL = 7
    ASSET_DEPLOYMENT = 8
    ASSET_RETURN = 9
    MAINTENANCE = 10
    CALIBRATION = 11
    QUARANTINE = 12
    LOST = 13
    STOLEN = 14
    DAMAGED = 15


class InventoryTransactionType(IntEnum):
    PURCHASE = 0
    SALE = 1
    RETURN = 2
    ADJUSTMENT = 3
    TRANSFER = 4
    DISPOSAL = 5
    ALLOCATION = 6
    CONSUMPTION = 7
    DONATION = 8
    FOUND = 9
    WRITE_OFF = 10


class AssetInventoryMappingStatus(IntEnum):
    DEPLOYED = 0
    ACTIVE = 0
    RETURNED = 1
    REMOVED = 1
    REPLACED = 2
    LOST = 3
    DAMAGED = 4
    STOLEN = 5


# ---------------------------------------------------------------------------
# IT requests
# ---------------------------------------------------------------------------


class RequestType(IntEnum):
    HARDWARE_REPLACEMENT = 1
    HARDWARE_REPAIR = 2
    NEW_EQUIPMENT = 3
    SOFTWARE_INSTALLATION = 4
    SOFTWARE_UPGRADE = 5
    NETWORK_CONNECTIVITY = 6
    USER_ACCESS_RIGHTS = 7
    IT_CONSULTATION = 8
    MAINTENANCE_SERVICE = 9
    TRAINING = 10
    OTHER = 99


class RequestPriority(IntEnum):
    CRITICAL = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4


class RequestStatus(IntEnum):
    PENDING = 1
    OPEN = 1
    SUBMITTED = 2
    UNDER_REVIEW = 3
    PENDING_APPROVAL = 4
    APPROVED = 5
    REJECTED = 6
    IN_PROGRESS = 7
    READY_FOR_COMPLETION = 8
    ON_HOLD = 9
    COMPLETED = 10
    CANCELLED = 11


CLOSED_REQUEST_STATUSES = frozenset(
    {RequestStatus.COMPLETED, RequestStatus.CANCELLED, RequestStatus.REJECTED}
)


class RequestActionType(IntEnum):
    CREATED = 1
    UPDATED = 2
    SUBMITTED = 3
    ASSIGNED = 4
    APPROVED = 5
    REJECTED = 6
    STARTED = 7
    COMPLETED = 8
    CANCELLED = 9
    COMMENT_ADDED = 10


class RequestActivityType(IntEnum):
    COMMENT = 0
    STATUS_CHANGE = 1
    ASSIGNMENT = 2
    ATTACHMENT = 3
    NOTE = 4
    APPROVAL = 5
    SYSTEM = 6


class CommentType(IntEnum):
    GENERAL = 1
    STATUS_UPDATE = 2
    TECHNICAL_NOTE = 3
    APPROVAL_NOTE = 4
    COMPLETION_NOTE = 5


# ---------------------------------------------------------------------------
# Approvals (shared by requests and procurement)
# ---------------------------------------------------------------------------


class ApprovalLevel(IntEnum):
    SUPERVISOR = 1
    DEPARTMENT = 2
    DEPARTMENT_HEAD = 3
    IT_DEPARTMENT = 4
    FINANCE = 5
    EXECUTIVE = 6


class ApprovalStatus(IntEnum):
    PENDING = 1
    APPROVED = 2
    REJECTED = 3
    DELEGATED = 4
    ESCALATED = 5


# ---------------------------------------------------------------------------
# Procurement
# ---------------------------------------------------------------------------


class ProcurementType(IntEnum):
    HARDWARE = 1
    SOFTWARE = 2
    SERVICES = 3
    CONSUMABLES = 4
    INFRASTRUCTURE = 5
    MAINTENANCE = 6
    TRAINING = 7
    NEW_EQUIPMENT = 8
    REPLACEMENT = 9
    EQUIPMENT = 10
    OTHER = 99


class ProcurementCategory(IntEnum):
    DESKTOP = 1
    LAPTOP = 2
    SERVER = 3
    NETWORK_EQUIPMENT = 4
    PRINTER = 5
    MONITOR = 6
    SOFTWARE_LICENSE = 7
    OPERATING_SYSTEM = 8
    SECURITY_SOFTWARE = 9
    PRODUCTIVITY_SOFTWARE = 10
    MAINTENANCE_CONTRACT = 11
    MAINTENANCE = 11
    SUPPORT_SERVICES = 12
    CONSULTING_SERVICES = 13
    TRAINING_SERVICES = 14
    CABLES = 15
    ACCESSORIES = 16
    CONSUMABLES = 17
    IT_EQUIPMENT = 18
    OTHER = 99


class ProcurementStatus(IntEnum):
    DRAFT = 1
    PENDING_APPROVAL = 2
    PENDING = 2
    APPROVED = 3
    REJECTED = 4
    IN_PROCUREMENT = 5
    IN_PROGRESS = 5
    ORDER_PLACED = 6
    ORDERED = 6
    PARTIALLY_DELIVERED = 7
    DELIVERED = 8
    RECEIVED = 9
    COMPLETED = 10
    CANCELLED = 11


class ProcurementMethod(IntEnum):
    DIRECT_PURCHASE = 1
    FRAMEWORK_AGREEMENT = 2
    COMPETITIVE_BIDDING = 3
    FORMAL_TENDER = 4
    EMERGENCY_PROCUREMENT = 5


class ProcurementSource(IntEnum):
    MANUAL = 1
    REQUEST_MODULE = 2
    INVENTORY_THRESHOLD = 3
    ASSET_LIFECYCLE = 4
    AUTO_GENERATED = 5


class ProcurementPriority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class ProcurementActivityType(IntEnum):
    CREATED = 1
    SUBMITTED = 2
    APPROVED = 3
    REJECTED = 4
    QUOTE_RECEIVED = 5
    VENDOR_SELECTED = 6
    ORDER_PLACED = 7
    RECEIVED = 8
    COMPLETED = 9
    CANCELLED = 10
    UPDATED = 11


class ProcurementDocumentType(IntEnum):
    SPECIFICATION = 1
    QUOTATION = 2
    PURCHASE_ORDER = 3
    INVOICE = 4
    DELIVERY_NOTE = 5
    CONTRACT = 6
    WARRANTY = 7
    OTHER = 99


class VendorStatus(IntEnum):
    ACTIVE = 1
    INACTIVE = 2
    SUSPENDED = 3
    BLACKLISTED = 4
    PENDING_APPROVAL = 5


# ---------------------------------------------------------------------------
# Workflow orchestration / notifications
# ---------------------------------------------------------------------------


class WorkflowStatus(IntEnum):
    PENDING = 0
    RUNNING = 1
    COMPLETED = 2
    FAILED = 3
    CANCELLED = 4
    SUSPENDED = 5


class WorkflowStepStatus(IntEnum):
    PENDING = 0
    RUNNING = 1
    COMPLETED = 2
    FAILED = 3
    SKIPPED = 4
    CANCELLED = 5


class WorkflowEventType(IntEnum):
    WORKFLOW_STARTED = 0
    WORKFLOW_COMPLETED = 1
    WORKFLOW_FAILED = 2
    WORKFLOW_CANCELLED = 3
    STEP_STARTED = 4
    STEP_COMPLETED = 5
    STEP_FAILED = 6
    EVENT_TRIGGERED = 7
    RULE_APPLIED = 8
    COMPENSATION_EXECUTED = 9


class AutomationRuleCategory(IntEnum):
    GENERAL = 0
    ASSET = 1
    INVENTORY = 2
    REQUEST = 3
    PROCUREMENT = 4
    MAINTENANCE = 5


def label(member: IntEnum) -> str:
    """PascalCase display name, e.g. AssetStatus.UNDER_MAINTENANCE -> 'UnderMaintenance'."""
    return "".join(part.capitalize() for part in member.name.split("_"))


def label_of(enum_cls: Type[IntEnum], value: Optional[int]) -> Optional[str]:
    """label() for a raw column value; unknown values come back as their digits."""
    if value is None:
        return None
    try:
        return label(enum_cls(value))
    except ValueError:
        return str(value)
