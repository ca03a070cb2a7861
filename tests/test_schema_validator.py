from typing import List, Optional

import pytest
from pydantic import BaseModel, Field

from lastrock_mcp.exceptions import ToolValidationError
from lastrock_mcp.tools import SchemaValidator


def test_optional_fields_are_simplified() -> None:
    """Optional[X] turns into plain X and keeps its description."""

    class Args(BaseModel):
        name: str = Field(description="A name")
        tags: Optional[List[str]] = Field(default=None, description="Some tags")

    schema = SchemaValidator.schema_for(Args)

    assert schema["required"] == ["name"]
    assert schema["properties"]["tags"] == {
        "type": "array",
        "items": {"type": "string"},
        "description": "Some tags",
    }
    assert "title" not in schema
    assert "title" not in schema["properties"]["name"]


def test_non_null_defaults_are_kept() -> None:
    class Args(BaseModel):
        verbose: bool = Field(default=True, description="Be chatty")

    schema = SchemaValidator.schema_for(Args)
    assert schema["properties"]["verbose"] == {"type": "boolean", "default": True, "description": "Be chatty"}


def test_property_named_title_survives() -> None:
    class Args(BaseModel):
        title: str = Field(description="Page title")

    schema = SchemaValidator.schema_for(Args)
    assert "title" in schema["properties"]


def test_empty_model_still_has_properties() -> None:
    class Args(BaseModel):
        pass

    schema = SchemaValidator.schema_for(Args)
    assert schema == {"type": "object", "properties": {}}


def test_missing_description_rejected() -> None:
    class Args(BaseModel):
        name: str

    with pytest.raises(ToolValidationError, match="missing a description"):
        SchemaValidator.schema_for(Args)


def test_nested_models_rejected() -> None:
    class Inner(BaseModel):
        value: int = Field(description="A value")

    class Args(BaseModel):
        inner: Inner = Field(description="Nested")

    with pytest.raises(ToolValidationError, match="Nested models"):
        SchemaValidator.schema_for(Args)
