"""
Fleet Maintenance Core
Domain enumerations.

Records are plain dicts; these constants are the only place the
allowed values of role / status / type fields are spelled out.
"""

# ── Users ────────────────────────────────────────────────────────────────────

ROLE_ADMIN = "Admin"
ROLE_INSPECTOR = "Inspector"
ROLE_ENGINEER = "Engineer"

USER_ROLES = (ROLE_ADMIN, ROLE_INSPECTOR, ROLE_ENGINEER)

# ── Ships ────────────────────────────────────────────────────────────────────

SHIP_ACTIVE = "Active"
SHIP_UNDER_MAINTENANCE = "Under Maintenance"
SHIP_DOCKED = "Docked"
SHIP_OUT_OF_SERVICE = "Out of Service"

SHIP_STATUSES = (SHIP_ACTIVE, SHIP_UNDER_MAINTENANCE, SHIP_DOCKED, SHIP_OUT_OF_SERVICE)

IMO_PATTERN = r"^\d{7}$"

# ── Components ───────────────────────────────────────────────────────────────

COMPONENT_OPERATIONAL = "Operational"
COMPONENT_NEEDS_MAINTENANCE = "Needs Maintenance"
COMPONENT_FAILED = "Failed"

COMPONENT_STATUSES = (COMPONENT_OPERATIONAL, COMPONENT_NEEDS_MAINTENANCE, COMPONENT_FAILED)
COMPONENT_CATEGORIES = ("Engine", "Navigation", "Safety", "Hull", "Electrical", "Other")

# ── Jobs ─────────────────────────────────────────────────────────────────────

JOB_OPEN = "Open"
JOB_IN_PROGRESS = "In Progress"
JOB_COMPLETED = "Completed"
JOB_DELAYED = "Delayed"
JOB_CANCELLED = "Cancelled"

JOB_STATUSES = (JOB_OPEN, JOB_IN_PROGRESS, JOB_COMPLETED, JOB_DELAYED, JOB_CANCELLED)
JOB_TYPES = ("Inspection", "Repair", "Replacement", "Maintenance", "Emergency")
JOB_PRIORITIES = ("Low", "Medium", "High", "Critical")

# ── Notifications ────────────────────────────────────────────────────────────

NOTIFY_JOB_CREATED = "job_created"
NOTIFY_JOB_UPDATED = "job_updated"
NOTIFY_JOB_COMPLETED = "job_completed"
NOTIFY_COMPONENT_ALERT = "component_alert"

NOTIFICATION_TYPES = (
    NOTIFY_JOB_CREATED,
    NOTIFY_JOB_UPDATED,
    NOTIFY_JOB_COMPLETED,
    NOTIFY_COMPONENT_ALERT,
)

# ── Persisted collections ────────────────────────────────────────────────────

USERS = "users"
SHIPS = "ships"
COMPONENTS = "components"
JOBS = "jobs"
NOTIFICATIONS = "notifications"

COLLECTIONS = (USERS, SHIPS, COMPONENTS, JOBS, NOTIFICATIONS)
SESSION_KEY = "current_user"
