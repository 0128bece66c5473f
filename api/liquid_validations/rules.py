# api/liquid_validations/rules.py
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from typing import Any, Callable, ClassVar, List, Optional, Tuple, Type, TypeVar, Union
import logging

from api.liquid_validations.helpers import (
    bracket_tags,
    contains_within,
    friendly_attr_name,
    friendly_liquid_error,
    tag_pattern,
    variable_pattern,
)
from api.liquid_validations.parser import LiquidParser
from common.exceptions import RuleConfigurationError

logger = logging.getLogger(__name__)

RuleT = TypeVar("RuleT", bound="LiquidRule")

# A presence policy is either fixed or decided per record
PresencePolicy = Union[bool, Callable[[Any], bool]]


def _text(value) -> str:
    return "" if value is None else str(value)


class LiquidRule(BaseModel):
    """Base class for rules that inspect the text of a single attribute"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    kind: ClassVar[str] = "liquid"

    def check(self, value, attr_name: str, record: Any = None) -> List[str]:
        """
        Return the error messages for `value`; an empty list means it passes

        Subclasses must override this.
        """
        raise NotImplementedError


class SyntaxRule(LiquidRule):
    """The attribute must parse as a Liquid template"""

    kind: ClassVar[str] = "syntax"

    parser: Any = Field(default_factory=LiquidParser, exclude=True)

    def check(self, value, attr_name: str, record: Any = None) -> List[str]:
        errors = []

        try:
            errors += list(self.parser.parse(_text(value)) or [])
        except Exception as e:
            logger.debug(f"Template parse failed for '{attr_name}': {e}")
            errors.append(str(e))

        attr = friendly_attr_name(attr_name)
        return [f"{friendly_liquid_error(error)} in your {attr}" for error in errors]


class VariablePresenceRule(LiquidRule):
    """The attribute must reference `{{ variable }}`, optionally inside a `<container>` tag"""

    kind: ClassVar[str] = "variable"

    variable: str = Field(default=None, validate_default=True)
    container: Optional[str] = None

    @field_validator("variable", mode="before")
    @classmethod
    def _require_variable(cls, value):
        if value is None or not str(value).strip():
            raise ValueError("You must supply a variable to check for")
        return str(value)

    @field_validator("container", mode="before")
    @classmethod
    def _blank_container(cls, value):
        if value is None or not str(value).strip():
            return None
        return str(value)

    def check(self, value, attr_name: str, record: Any = None) -> List[str]:
        text = _text(value)
        attr = friendly_attr_name(attr_name)

        if self.container is None:
            if not variable_pattern(self.variable).search(text):
                return [f"You must include {{{{ {self.variable} }}}} in your {attr}"]
        elif not contains_within(text, self.container, self.variable):
            return [
                f"You must include {{{{ {self.variable} }}}} inside the "
                f"<{self.container}> tag of your {attr}"
            ]
        return []


class TagRule(LiquidRule):
    """
    The attribute must contain `{% tag %}` directives

    `tags` accepts a single name or an ordered list of names. `max` bounds the
    number of occurrences of each tag. `presence` decides whether a missing tag
    is an error; it may be a callable evaluated against the record.
    """

    kind: ClassVar[str] = "tag"

    tags: Tuple[str, ...] = Field(default=(), alias="tag")
    max: Optional[int] = Field(default=None, ge=0)
    presence: PresencePolicy = True

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        tags = tuple(str(tag) for tag in value)
        if any(not tag.strip() for tag in tags):
            raise ValueError("Tag names cannot be blank")
        return tags

    @model_validator(mode="after")
    def _require_tag_and_max(self):
        if self.presence is not False and (not self.tags or not self.max):
            raise ValueError("You must supply a tag and max to check for")
        return self

    def resolve_presence(self, record: Any = None) -> bool:
        if callable(self.presence):
            return bool(self.presence(record))
        return bool(self.presence)

    def check(self, value, attr_name: str, record: Any = None) -> List[str]:
        errors = []
        if not self.tags:
            return errors

        presence = self.resolve_presence(record)
        text = _text(value)
        attr = friendly_attr_name(attr_name)
        counts = [(tag, len(tag_pattern(tag).findall(text))) for tag in self.tags]

        if presence and any(count == 0 for _, count in counts):
            errors.append(f"You must supply {bracket_tags(self.tags)} in your {attr}")

        if self.max is not None:
            over_limit = [tag for tag, count in counts if count > self.max]
            if over_limit:
                errors.append(
                    f"{attr} must not have more than {self.max} {bracket_tags(over_limit)}"
                )

        return errors


def configure(rule_class: Type[RuleT], **options) -> RuleT:
    """Build a rule, raising RuleConfigurationError for missing or invalid options"""
    options.pop("message", None)
    try:
        return rule_class(**options)
    except ValidationError as e:
        reasons = []
        for error in e.errors():
            cause = (error.get("ctx") or {}).get("error")
            reasons.append(str(cause) if cause is not None else error["msg"])
        raise RuleConfigurationError("; ".join(reasons)) from e
