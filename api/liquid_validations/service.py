# api/liquid_validations/service.py
from typing import Any, Callable, Dict, Optional
import logging

from api.liquid_validations.schemas import (
    LiquidValidationRequest,
    LiquidValidationResponse,
    PresenceCondition,
)
from api.liquid_validations.validations import LiquidValidations, read_attribute
from common.exceptions import ValidationException
from config import settings

logger = logging.getLogger(__name__)

class LiquidValidationService:
    """Business logic for validating attributes against Liquid rules"""

    def __init__(self, max_template_size: Optional[int] = None):
        self.max_template_size = max_template_size or settings.MAX_TEMPLATE_SIZE

    @staticmethod
    def presence_predicate(condition: PresenceCondition) -> Callable[[Any], bool]:
        """Turn a presence condition into a predicate over the record"""
        def predicate(record) -> bool:
            return read_attribute(record, condition.field) == condition.equals
        return predicate

    def build_validations(self, request: LiquidValidationRequest, attribute: str) -> LiquidValidations:
        """
        Build a rule registry from the request

        Raises:
            RuleConfigurationError: when a rule is missing required options
        """
        validations = LiquidValidations()

        if request.syntax:
            validations.validates_liquid_of(attribute)

        for spec in request.variables:
            validations.validates_presence_of_liquid_variable(
                attribute, variable=spec.variable, container=spec.container
            )

        for spec in request.tags:
            presence = spec.presence
            if spec.presence_when is not None:
                presence = self.presence_predicate(spec.presence_when)
            validations.validates_liquid_tag(attribute, tag=spec.tag, max=spec.max, presence=presence)

        return validations

    def _check_size(self, content: Optional[str]):
        size = len((content or "").encode("utf-8"))
        if size > self.max_template_size:
            raise ValidationException(
                f"Template size ({size} bytes) exceeds maximum ({self.max_template_size} bytes)"
            )

    def validate(self, request: LiquidValidationRequest) -> LiquidValidationResponse:
        """Validate the request content, returning every rule failure"""
        self._check_size(request.content)

        attribute = request.attribute or settings.DEFAULT_ATTRIBUTE_NAME
        validations = self.build_validations(request, attribute)

        record: Dict[str, Any] = dict(request.record)
        record[attribute] = request.content

        errors = validations.validate(record)
        if not errors:
            return LiquidValidationResponse(valid=True, message="Template passed all Liquid validations")

        logger.info(f"Liquid validation of '{attribute}' failed with {len(errors)} error(s)")
        return LiquidValidationResponse(
            valid=False,
            message="Liquid validation failed",
            errors=errors.full_messages
        )
