"""User Shapes: field declarations for the User entity.

Invariants:
    - name: text, at least 3 characters, required
    - email: email format, validated by EMAIL_PATTERN, required
"""

from dynamic_crud.core.domain_types import EntityDescriptor, FieldDescriptor
from dynamic_crud.core.schema_registry import create_schema, update_schema

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

USER_ENTITY = EntityDescriptor(
    name="User",
    fields=(
        FieldDescriptor("name", "string", format="text", min_length=3),
        FieldDescriptor("email", "string", format="email", pattern=EMAIL_PATTERN),
    ),
)

CREATE_USER_SCHEMA = create_schema(USER_ENTITY)
UPDATE_USER_SCHEMA = update_schema(USER_ENTITY)
