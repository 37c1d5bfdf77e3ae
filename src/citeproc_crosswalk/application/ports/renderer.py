from typing import Protocol, runtime_checkable


@runtime_checkable
class CitationRendererPort(Protocol):
    """Protocol for the external citation-style processor."""

    def render(self, item_json: str, style: str, locale: str) -> str:
        """
        Render one CSL-JSON item as a citation string.

        Args:
            item_json: CSL-JSON document for the item (single object, id 'ITEM-1')
            style: Citation style identifier (e.g., 'apa6')
            locale: Locale identifier with a hyphen separator (e.g., 'en-GB')

        Returns:
            Citation text; may be empty if the style produced nothing

        Raises:
            CitationGenerationError: If the style, locale or renderer is unusable
        """
        ...
