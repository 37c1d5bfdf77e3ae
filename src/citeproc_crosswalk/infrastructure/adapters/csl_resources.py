from __future__ import annotations

import logging
from pathlib import Path

from ...domain.errors import CitationGenerationError

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "apa6"
DEFAULT_LOCALE = "en-GB"


class CslResourceLoader:
    """
    Locates CSL style and locale files.

    Styles live at <styles_dir>/<style>.xml and locales at
    <locales_dir>/locale-<locale>.xml. Unknown styles or locales fall back to
    the defaults with a warning.
    """

    def __init__(
        self,
        styles_dir: Path | str,
        locales_dir: Path | str,
        default_style: str = DEFAULT_STYLE,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.styles_dir = Path(styles_dir)
        self.locales_dir = Path(locales_dir)
        self.default_style = default_style
        self.default_locale = default_locale

    def style_path(self, style: str) -> Path:
        """
        Raises:
            CitationGenerationError: If neither the style nor the default style exists
        """
        path = self.styles_dir / f"{style}.xml"
        if path.exists():
            return path
        logger.warning(
            f"No style file found for requested style {style}; falling back to default",
            extra={"style": style, "default_style": self.default_style},
        )
        fallback = self.styles_dir / f"{self.default_style}.xml"
        if not fallback.exists():
            raise CitationGenerationError("No usable style found", str(fallback))
        return fallback

    def locale_path(self, locale: str) -> Path:
        """
        Raises:
            CitationGenerationError: If neither the locale nor the default locale exists
        """
        locale = locale.replace("_", "-")
        path = self.locales_dir / f"locale-{locale}.xml"
        if path.exists():
            return path
        logger.warning(
            f"No locale file found for requested locale {locale}; falling back to default",
            extra={"locale": locale, "default_locale": self.default_locale},
        )
        fallback = self.locales_dir / f"locale-{self.default_locale}.xml"
        if not fallback.exists():
            raise CitationGenerationError("No usable locale found", str(fallback))
        return fallback
