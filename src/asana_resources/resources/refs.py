"""Compact references embedded in other resources."""

from ..resource import Resource


class User(Resource):
    plural_name = "users"
    schema = {**Resource.schema, "name": str, "email": str}


class Workspace(Resource):
    plural_name = "workspaces"
    schema = {**Resource.schema, "name": str}


class Project(Resource):
    plural_name = "projects"
    schema = {**Resource.schema, "name": str}


class CustomField(Resource):
    plural_name = "custom_fields"
    schema = {**Resource.schema, "name": str, "type": str}
