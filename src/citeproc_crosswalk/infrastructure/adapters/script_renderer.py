from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from ...domain.errors import CitationGenerationError
from .csl_resources import CslResourceLoader

logger = logging.getLogger(__name__)


class ScriptCitationRenderer:
    """
    Renders citations with an external citeproc script.

    The command receives the CSL-JSON item on stdin and the style and locale file
    paths as its last two arguments, and prints the citation on stdout, e.g.
    ['node', 'make-citation.js'] runs `node make-citation.js <style.xml> <locale.xml>`.
    """

    def __init__(
        self,
        command: Sequence[str],
        resources: CslResourceLoader,
        timeout_s: float = 60.0,
    ) -> None:
        if not command:
            raise ValueError("renderer command must be a non-empty argument list")
        self.command = list(command)
        self.resources = resources
        self.timeout_s = timeout_s

    def render(self, item_json: str, style: str, locale: str) -> str:
        """
        Raises:
            CitationGenerationError: If style/locale files are missing, or the script
                cannot start, times out or exits non-zero
        """
        style_path = self.resources.style_path(style)
        locale_path = self.resources.locale_path(locale)
        args = [*self.command, str(style_path), str(locale_path)]

        try:
            result = subprocess.run(
                args,
                input=item_json,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except FileNotFoundError as e:
            raise CitationGenerationError("Cannot make citation", f"renderer not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise CitationGenerationError(
                "Cannot make citation", f"renderer timed out after {self.timeout_s}s"
            ) from e

        if result.returncode != 0:
            logger.error(
                f"Citation renderer exited with code {result.returncode}",
                extra={"returncode": result.returncode, "stderr": result.stderr[-500:]},
            )
            raise CitationGenerationError(
                "Cannot make citation",
                (result.stderr or "").strip() or f"exit code {result.returncode}",
            )
        return result.stdout.strip()
