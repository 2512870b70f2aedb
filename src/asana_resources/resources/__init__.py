from .custom_field_setting import CustomFieldSetting
from .portfolio import Portfolio
from .project_membership import ProjectMembership
from .refs import CustomField, Project, User, Workspace

__all__ = [
    "CustomField",
    "CustomFieldSetting",
    "Portfolio",
    "Project",
    "ProjectMembership",
    "User",
    "Workspace",
]
