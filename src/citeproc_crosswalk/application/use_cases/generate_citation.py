from __future__ import annotations

import logging

from ...domain.errors import CitationGenerationError, InvalidTargetField
from ...domain.models.metadata_record import MetadataRecord
from ...domain.types import FieldId
from ..dto.citation import CitationStatus, GenerateCitationRequest, GenerateCitationResult
from ..ports.renderer import CitationRendererPort
from ..services.crosswalk import CiteprocCrosswalk

logger = logging.getLogger(__name__)


def normalize_locale(locale: str) -> str:
    """'en_GB' -> 'en-GB'; renderers and locale files use hyphens."""
    return locale.strip().replace("_", "-")


def generate_citation(
    request: GenerateCitationRequest,
    record: MetadataRecord,
    crosswalk: CiteprocCrosswalk,
    renderer: CitationRendererPort,
) -> GenerateCitationResult:
    """
    Generate a citation for one record.

    Args:
        request: Target field, style, locale and force flag
        record: Item metadata
        crosswalk: Configured crosswalk producing the CSL-JSON
        renderer: External citation-style processor

    Returns:
        GenerateCitationResult with status:
        - SKIP when the record already has a citation and force is not set
        - ERROR when the target field is invalid, the JSON is empty or rendering fails
        - FAIL when the renderer returns an empty citation
        - SUCCESS with the citation otherwise

    Note:
        Storing the citation on the item is left to the caller.
    """
    item_label = record.item_id or "unknown"

    try:
        target = FieldId.parse(request.target_field)
    except InvalidTargetField as e:
        message = f"Invalid setting for citation field ({request.target_field}), aborting"
        logger.error(message, extra={"item_id": item_label, "error": str(e)})
        return GenerateCitationResult(
            status=CitationStatus.ERROR, message=message, target_field=request.target_field
        )
    if target.is_wildcard:
        message = f"Citation field must not use a wildcard qualifier ({request.target_field}), aborting"
        logger.error(message, extra={"item_id": item_label})
        return GenerateCitationResult(
            status=CitationStatus.ERROR, message=message, target_field=request.target_field
        )

    if record.has_value(target) and not request.force:
        message = f"Item already has citation, skipping; item_id={item_label}"
        logger.info(message, extra={"item_id": item_label, "target_field": str(target)})
        return GenerateCitationResult(status=CitationStatus.SKIP, message=message, target_field=str(target))

    item_json = crosswalk.to_json(record)
    if not item_json:
        message = f"Problem extracting metadata from item; item_id={item_label}"
        logger.error(message, extra={"item_id": item_label})
        return GenerateCitationResult(status=CitationStatus.ERROR, message=message, target_field=str(target))

    locale = normalize_locale(request.locale)
    try:
        citation = renderer.render(item_json, request.style, locale)
    except CitationGenerationError as e:
        message = f"Problem generating citation; item_id={item_label}: {e}"
        logger.error(
            message,
            extra={"item_id": item_label, "style": request.style, "locale": locale},
            exc_info=True,
        )
        return GenerateCitationResult(
            status=CitationStatus.ERROR, message=message, target_field=str(target), item_json=item_json
        )

    citation = (citation or "").strip()
    if not citation:
        message = f"Empty citation for item_id={item_label}"
        logger.info(message, extra={"item_id": item_label, "style": request.style})
        return GenerateCitationResult(
            status=CitationStatus.FAIL, message=message, target_field=str(target), item_json=item_json
        )

    logger.info(
        f"Generated citation for item_id={item_label}",
        extra={"item_id": item_label, "style": request.style, "locale": locale},
    )
    return GenerateCitationResult(
        status=CitationStatus.SUCCESS,
        message=f"Added citation {citation}",
        target_field=str(target),
        citation=citation,
        item_json=item_json,
    )
