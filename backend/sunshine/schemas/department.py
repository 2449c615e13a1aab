from pydantic import BaseModel, field_validator


class DepartmentEntry(BaseModel):
    """Contact attributes for one name in the dataset file."""

    email: str = ""
    contact_name: str = ""
    notes: str = ""
    url: str = ""

    @field_validator("email", "contact_name", "notes", "url", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class Department(BaseModel):
    name: str
    name_slug: str
    email: str = ""
    contact_name: str = ""
    notes: str = ""
    url: str = ""

    model_config = {"frozen": True}


class DepartmentListResponse(BaseModel):
    departments: list[Department]
    total: int
