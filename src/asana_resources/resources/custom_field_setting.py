from ..resource import Resource
from .refs import CustomField, Project


class CustomFieldSetting(Resource):
    """
    The association of a custom field with a project or portfolio: whether it
    is marked important, and where it sits among the parent's other fields.
    """

    plural_name = "custom_field_settings"
    schema = {
        **Resource.schema,
        "project": Project,
        "is_important": bool,
        "parent": Resource,
        "custom_field": CustomField,
    }
