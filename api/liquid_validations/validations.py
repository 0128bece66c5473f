# api/liquid_validations/validations.py
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Dict, Iterator, List, NamedTuple, Optional, Tuple, Type
import logging

from api.liquid_validations.rules import (
    LiquidRule,
    SyntaxRule,
    TagRule,
    VariablePresenceRule,
    configure,
)
from common.exceptions import RuleConfigurationError

logger = logging.getLogger(__name__)

Condition = Callable[[Any], bool]


def read_attribute(record: Any, attr_name: str):
    """Read an attribute from a mapping or a plain object; missing values are None"""
    if isinstance(record, Mapping):
        return record.get(attr_name)
    return getattr(record, attr_name, None)


class RecordErrors:
    """Errors collected for one record, all attached to the record-level `base` bucket"""

    def __init__(self):
        self.base: List[str] = []

    def add(self, message: str):
        self.base.append(message)

    @property
    def full_messages(self) -> List[str]:
        return list(self.base)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"base": list(self.base)}

    def __iter__(self) -> Iterator[str]:
        return iter(self.base)

    def __len__(self) -> int:
        return len(self.base)

    def __bool__(self) -> bool:
        return bool(self.base)

    def __repr__(self):
        return f"<RecordErrors(base={self.base!r})>"


class AttachedRule(NamedTuple):
    attr_names: Tuple[str, ...]
    rule: LiquidRule
    condition: Optional[Condition] = None


class LiquidValidations:
    """
    Registry of Liquid rules attached to record attributes

    Rules are configured when attached, so a missing option raises
    RuleConfigurationError before any record is validated.

    Example:
        validations = LiquidValidations()
        validations.validates_liquid_of("body")
        validations.validates_presence_of_liquid_variable("body", variable="unsubscribe_url")
        validations.validates_liquid_tag("body", tag="footer", max=1)
        errors = validations.validate({"body": "..."})
    """

    def __init__(self):
        self.rules: List[AttachedRule] = []

    def validates_liquid_of(self, *attr_names: str, condition: Optional[Condition] = None,
                            **options) -> "LiquidValidations":
        """Attributes must parse as Liquid templates"""
        return self._attach(SyntaxRule, attr_names, condition, options)

    def validates_presence_of_liquid_variable(self, *attr_names: str,
                                              condition: Optional[Condition] = None,
                                              **options) -> "LiquidValidations":
        """Attributes must reference `variable`, optionally inside `container`"""
        return self._attach(VariablePresenceRule, attr_names, condition, options)

    def validates_liquid_tag(self, *attr_names: str, condition: Optional[Condition] = None,
                             **options) -> "LiquidValidations":
        """Attributes must contain `tag` at most `max` times, subject to `presence`"""
        return self._attach(TagRule, attr_names, condition, options)

    def _attach(self, rule_class: Type[LiquidRule], attr_names, condition, options):
        if not attr_names:
            raise RuleConfigurationError("You must supply at least one attribute to validate")
        if condition is not None and not callable(condition):
            raise RuleConfigurationError("condition must be callable")

        rule = configure(rule_class, **options)
        self.rules.append(AttachedRule(tuple(str(name) for name in attr_names), rule, condition))
        logger.debug(f"Attached {rule.kind} rule to {', '.join(attr_names)}")
        return self

    def validate(self, record: Any) -> RecordErrors:
        """Run every attached rule against `record`"""
        errors = RecordErrors()

        for attached in self.rules:
            if attached.condition is not None and not attached.condition(record):
                continue

            for attr_name in attached.attr_names:
                value = read_attribute(record, attr_name)
                for message in attached.rule.check(value, attr_name, record):
                    errors.add(message)

        return errors

    def is_valid(self, record: Any) -> bool:
        return not self.validate(record)


class LiquidValidated:
    """Mixin for record classes that declare a class-level `liquid_validations` registry"""

    liquid_validations: ClassVar[LiquidValidations]

    def liquid_errors(self) -> RecordErrors:
        return type(self).liquid_validations.validate(self)

    def is_liquid_valid(self) -> bool:
        return not self.liquid_errors()
