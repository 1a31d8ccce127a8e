from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Shared config for request/response bodies.

    camelCase on the wire (licenseNumber, createdAt), snake_case in Python.
    Both spellings are accepted on input. Unknown keys are ignored.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )
