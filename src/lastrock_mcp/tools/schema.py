from typing import Any, Dict, Type

from pydantic import BaseModel

from ..exceptions import ToolValidationError
from ..logger import get_logger

logger = get_logger(__name__)


class SchemaValidator:
    """
    Helper class for turning pydantic argument models into MCP input schemas.
    """

    @classmethod
    def schema_for(cls, args_model: Type[BaseModel]) -> Dict[str, Any]:
        """
        Builds the ``inputSchema`` advertised for a tool.

        Every field of the model must carry a description, since the schema is
        the only documentation a client sees.

        Args:
            args_model: The pydantic model describing the tool's parameters.

        Returns:
            The sanitized JSON schema, always of ``type: object``.

        Raises:
            ToolValidationError: If a field has no description or the schema uses references.
        """
        for field_name, field_info in args_model.model_fields.items():
            if not field_info.description:
                msg = f"Parameter '{field_name}' in '{args_model.__name__}' is missing a description."
                logger.error(msg)
                raise ToolValidationError(msg)

        raw_schema = args_model.model_json_schema()
        if raw_schema.get("$defs") or raw_schema.get("definitions"):
            msg = f"Nested models are not supported in tool inputs ('{args_model.__name__}')."
            logger.error(msg)
            raise ToolValidationError(msg)

        schema = cls.sanitize_schema(raw_schema)
        schema.setdefault("properties", {})
        return schema

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a pydantic-generated schema.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null) and drops null defaults.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        if "default" in new_schema and new_schema["default"] is None:
            del new_schema["default"]

        if "anyOf" in new_schema:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if x.get("type") != "null"]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                # Keep the parent's description and default, take the type from the branch
                merged = non_null[0].copy()
                for key in ("description", "default"):
                    if key in new_schema:
                        merged[key] = new_schema[key]
                return SchemaValidator.sanitize_schema(merged)

        # "properties" maps names to schemas; a property may itself be called "title"
        if isinstance(new_schema.get("properties"), dict):
            new_schema["properties"] = {
                name: SchemaValidator.sanitize_schema(value) for name, value in new_schema["properties"].items()
            }

        if isinstance(new_schema.get("items"), dict):
            new_schema["items"] = SchemaValidator.sanitize_schema(new_schema["items"])

        return new_schema
