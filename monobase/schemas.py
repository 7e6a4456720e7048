"""
Shared Pydantic Types/Schemas.

Template definitions declared by modules, and the record shape handed to the
email template store.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import EmailTemplateStatus, TemplateVariableType


# =============================================================================
# Template Definitions
# =============================================================================

class TemplateVariable(BaseModel):
    """Variable a template expects when rendered."""
    model_config = ConfigDict(frozen=True, use_enum_values=True, validate_default=True)

    id: str = Field(min_length=1)
    type: TemplateVariableType = TemplateVariableType.STRING
    label: str
    required: bool = False
    default_value: Optional[Union[str, int, float, bool]] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None


class TemplateMetadata(BaseModel):
    """Template metadata for module-based templates."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    subject: str = Field(min_length=1)
    tags: List[str] = Field(min_length=1)
    variables: List[TemplateVariable] = Field(default_factory=list)
    from_name: Optional[str] = None
    from_email: Optional[str] = None
    reply_to_email: Optional[str] = None
    reply_to_name: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def dedupe_tags(cls, v: Any) -> Any:
        """Tags form a set; keep first occurrence order."""
        if isinstance(v, (list, tuple, set, frozenset)):
            seen: Dict[str, None] = {}
            for tag in v:
                seen.setdefault(tag.value if hasattr(tag, "value") else tag, None)
            return list(seen)
        return v


class TemplateContent(BaseModel):
    """Template bodies."""
    model_config = ConfigDict(frozen=True)

    html: str
    text: Optional[str] = None


class TemplateDefinition(BaseModel):
    """Template definition with content."""
    model_config = ConfigDict(frozen=True)

    metadata: TemplateMetadata
    content: TemplateContent


# =============================================================================
# Stored Templates
# =============================================================================

class NewEmailTemplate(BaseModel):
    """Schema for creating a stored email template."""
    name: str
    description: Optional[str] = None
    subject: str
    body_html: str
    body_text: Optional[str] = None
    tags: List[str]
    variables: List[Dict[str, Any]] = Field(default_factory=list)
    from_name: Optional[str] = None
    from_email: Optional[str] = None
    reply_to_email: Optional[str] = None
    reply_to_name: Optional[str] = None
    status: EmailTemplateStatus = EmailTemplateStatus.ACTIVE

    @classmethod
    def from_definition(cls, definition: TemplateDefinition) -> "NewEmailTemplate":
        metadata = definition.metadata
        return cls(
            name=metadata.name,
            description=metadata.description,
            subject=metadata.subject,
            body_html=definition.content.html,
            body_text=definition.content.text,
            tags=list(metadata.tags),
            variables=[
                variable.model_dump(exclude_none=True) for variable in metadata.variables
            ],
            from_name=metadata.from_name,
            from_email=metadata.from_email,
            reply_to_email=metadata.reply_to_email,
            reply_to_name=metadata.reply_to_name,
            status=EmailTemplateStatus.ACTIVE,
        )


__all__ = [
    "TemplateVariable",
    "TemplateMetadata",
    "TemplateContent",
    "TemplateDefinition",
    "NewEmailTemplate",
]
