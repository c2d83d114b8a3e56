# app/models/__init__.py
"""
Re-export every ORM model of the hospital asset tracker schema.
"""

from importlib import import_module


def _export(module_name: str, class_name: str) -> None:
    module = import_module(module_name)
    globals()[class_name] = getattr(module, class_name)


MODEL_SPECS = [
    # -------- identity --------
    ("app.models.identity", "Role"),
    ("app.models.identity", "User"),
    ("app.models.identity", "RoleClaim"),
    ("app.models.identity", "UserClaim"),
    ("app.models.identity", "UserLogin"),
    ("app.models.identity", "UserRole"),
    ("app.models.identity", "UserToken"),
    # -------- locations / assets --------
    ("app.models.location", "Location"),
    ("app.models.asset", "Asset"),
    ("app.models.asset", "AssetMovement"),
    ("app.models.audit_log", "AuditLog"),
    ("app.models.maintenance", "MaintenanceRecord"),
    ("app.models.write_off", "WriteOffRecord"),
    # -------- inventory --------
    ("app.models.inventory", "InventoryItem"),
    ("app.models.inventory", "AssetInventoryMapping"),
    ("app.models.inventory", "InventoryMovement"),
    ("app.models.inventory", "InventoryTransaction"),
    ("app.models.inventory", "QualityAssessmentRecord"),
    # -------- IT requests --------
    ("app.models.request", "ITRequest"),
    ("app.models.request", "RequestAction"),
    ("app.models.request", "RequestActivity"),
    ("app.models.request", "RequestApproval"),
    ("app.models.request", "RequestAttachment"),
    ("app.models.request", "RequestComment"),
    ("app.models.request", "RequestEscalation"),
    ("app.models.request", "RequestTemplate"),
    # -------- procurement --------
    ("app.models.procurement", "Vendor"),
    ("app.models.procurement", "ProcurementRequest"),
    ("app.models.procurement", "ProcurementItem"),
    ("app.models.procurement", "ProcurementApproval"),
    ("app.models.procurement", "ProcurementActivity"),
    ("app.models.procurement", "ProcurementDocument"),
    ("app.models.procurement", "VendorQuote"),
    ("app.models.procurement", "QuoteItem"),
    # -------- automation --------
    ("app.models.automation", "AutomationRule"),
    ("app.models.automation", "AutomationLog"),
    # -------- workflow / notifications --------
    ("app.models.workflow", "WorkflowInstance"),
    ("app.models.workflow", "WorkflowStepInstance"),
    ("app.models.workflow", "WorkflowEvent"),
    ("app.models.workflow", "EventSubscription"),
    ("app.models.workflow", "Notification"),
    # -------- analytics / bug tracking --------
    ("app.models.analytics", "BudgetCategoryAnalysis"),
    ("app.models.analytics", "BudgetDepartmentAnalysis"),
    ("app.models.analytics", "CategoryForecast"),
    ("app.models.analytics", "SpendAnomaly"),
    ("app.models.analytics", "SpendTrend"),
    ("app.models.analytics", "BugTracking"),
    ("app.models.analytics", "BugFixHistory"),
    ("app.models.analytics", "SystemVersion"),
]

for _module, _name in MODEL_SPECS:
    _export(_module, _name)

__all__ = [name for _, name in MODEL_SPECS]
