# api/liquid_validations/controller.py
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from api.liquid_validations.service import LiquidValidationService
from api.liquid_validations.schemas import (
    LiquidValidationRequest,
    LiquidValidationResponse,
    RuleCheckResponse
)
from common.exceptions import BadRequestException, RuleConfigurationError
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter()

def get_validation_service() -> LiquidValidationService:
    """Dependency to get LiquidValidationService instance"""
    return LiquidValidationService()

@router.post(
    "/validate",
    response_model=LiquidValidationResponse,
    summary="Validate Content Against Liquid Rules",
    description="Check Liquid syntax, required variables and tag limits for a single attribute"
)
async def validate_content(
    request: LiquidValidationRequest,
    service: LiquidValidationService = Depends(get_validation_service)
):
    """
    Validate content against Liquid rules

    - **content**: Attribute value to validate
    - **attribute**: Attribute name used in error messages
    - **record**: Other record fields, used by `presence_when`
    - **syntax**: Check the content parses as Liquid
    - **variables**: Required `{{ variable }}` references
    - **tags**: Required or bounded `{% tag %}` directives

    Returns validation result with any rule failures
    """
    try:
        logger.info(f"Validating '{request.attribute or settings.DEFAULT_ATTRIBUTE_NAME}' against Liquid rules")
        return service.validate(request)
    except RuleConfigurationError as e:
        logger.warning(f"Invalid rule configuration: {e}")
        raise BadRequestException(f"Invalid rule configuration: {e}")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error validating content: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Validation error: {str(e)}"
        )

@router.post(
    "/rules/check",
    response_model=RuleCheckResponse,
    summary="Check Liquid Rule Configuration",
    description="Check that rule options are complete without validating any content"
)
async def check_rules(
    request: LiquidValidationRequest,
    service: LiquidValidationService = Depends(get_validation_service)
):
    """Check rule configuration only"""
    attribute = request.attribute or settings.DEFAULT_ATTRIBUTE_NAME
    try:
        validations = service.build_validations(request, attribute)
    except RuleConfigurationError as e:
        logger.warning(f"Invalid rule configuration: {e}")
        raise BadRequestException(f"Invalid rule configuration: {e}")

    return RuleCheckResponse(
        success=True,
        message="Rule configuration is valid",
        attribute=attribute,
        rules=[attached.rule.kind for attached in validations.rules]
    )
