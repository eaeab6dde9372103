from enum import Enum


class UserType(str, Enum):
    Learner = "learner"
    Staff = "staff"
    GlobalAdmin = "global-admin"


class DashboardArea(str, Enum):
    Learner = "learner"
    Staff = "staff"
    Admin = "admin"


class PermissionScope(str, Enum):
    Global = "global"
    Department = "department"


class ExpansionMode(str, Enum):
    Independent = "independent"
    Accordion = "accordion"
