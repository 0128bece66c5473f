# api/liquid_validations/schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

class PresenceCondition(BaseModel):
    """Require a tag only when a record field equals a value"""
    field: str = Field(..., min_length=1, description="Record field to inspect")
    equals: Any = Field(None, description="Value the field must equal for the tag to be required")

class VariableRuleSpec(BaseModel):
    """Schema for a required {{ variable }} rule"""
    variable: str = Field(..., description="Variable that must be referenced")
    container: Optional[str] = Field(None, description="Tag the variable must appear inside")

class TagRuleSpec(BaseModel):
    """Schema for a {% tag %} rule"""
    tag: Union[str, List[str], None] = Field(None, description="Tag name or ordered list of tag names")
    max: Optional[int] = Field(None, description="Maximum occurrences of each tag")
    presence: bool = Field(True, description="Whether a missing tag is an error")
    presence_when: Optional[PresenceCondition] = Field(
        None, description="Require the tag only for records matching this condition"
    )

class LiquidValidationRequest(BaseModel):
    """Schema for validating an attribute against Liquid rules"""
    content: Optional[str] = Field(None, description="Attribute value to validate")
    attribute: Optional[str] = Field(None, description="Attribute name used in error messages")
    record: Dict[str, Any] = Field(default_factory=dict, description="Other record fields")
    syntax: bool = Field(True, description="Check that the content parses as Liquid")
    variables: List[VariableRuleSpec] = Field(default_factory=list)
    tags: List[TagRuleSpec] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "content": "<footer>{{ unsubscribe_url }}</footer>{% include 'signature' %}",
                "attribute": "email_body",
                "record": {"state": "published"},
                "syntax": True,
                "variables": [{"variable": "unsubscribe_url", "container": "footer"}],
                "tags": [{"tag": "include", "max": 1, "presence_when": {"field": "state", "equals": "published"}}]
            }
        }

class LiquidValidationResponse(BaseModel):
    """Schema for Liquid validation response"""
    valid: bool
    message: str
    errors: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "valid": False,
                "message": "Liquid validation failed",
                "errors": ["You must include {{ unsubscribe_url }} in your email body"]
            }
        }

class RuleCheckResponse(BaseModel):
    """Schema for rule configuration check response"""
    success: bool
    message: str
    attribute: str
    rules: List[str] = Field(default_factory=list, description="Kinds of the configured rules, in order")
