"""State of the keyword converter front end: input, output and last result."""

import logging
import shutil
import subprocess
from collections.abc import Callable

from pydantic import BaseModel

from matchswitch.models.keyword import ConversionResult, MatchType
from matchswitch.pipeline.keyword_pipeline import KeywordPipeline

logger = logging.getLogger(__name__)

# Tried in order; the first command found on PATH receives the text on stdin
CLIPBOARD_COMMANDS = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


def system_clipboard(text: str) -> bool:
    """Copy text with the platform clipboard tool. Returns False if none worked."""
    for command in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.run(command, input=text, text=True, check=True, timeout=5)
            return True
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Clipboard command {command[0]} failed: {e}")
    return False


class CopyOutcome(BaseModel):
    """Feedback shown after a copy attempt."""

    copied: bool
    message: str


class KeywordShell:
    """
    Front-end state around a KeywordPipeline.

    Rejected conversions and blank input leave the previous output and
    summary in place.
    """

    def __init__(
        self,
        pipeline: KeywordPipeline | None = None,
        clipboard: Callable[[str], bool] | None = None,
    ):
        self.pipeline = pipeline or KeywordPipeline()
        self.clipboard = clipboard or system_clipboard
        self.input_text = ""
        self.output_text = ""
        self.last_result: ConversionResult | None = None

    def convert(self, target: MatchType | str, text: str | None = None) -> ConversionResult:
        """Convert the current input (or ``text``, which replaces it) to ``target``."""
        if text is not None:
            self.input_text = text

        result = self.pipeline.run(self.input_text, target)
        # Rejected or blank requests keep whatever output is on screen
        if result.is_rejected or not self.input_text.strip():
            return result

        self.output_text = result.output_text
        self.last_result = result
        return result

    def summary_text(self) -> list[str]:
        summary = self.last_result.summary if self.last_result else None
        keyword_count = summary.keyword_count if summary else 0
        duplicate_count = summary.duplicate_count if summary else 0
        invalid_count = summary.invalid_count if summary else 0
        return [
            f"{keyword_count} keywords",
            f"{duplicate_count} duplicates removed",
            f"{invalid_count} invalid keywords",
        ]

    def copy_to_clipboard(self) -> CopyOutcome:
        """Copy the current output; falls back to manual copying when no clipboard is available."""
        if not self.output_text.strip():
            return CopyOutcome(copied=False, message="No keywords to copy")

        try:
            copied = self.clipboard(self.output_text)
        except Exception as e:
            logger.debug(f"Clipboard unavailable: {e}")
            copied = False

        if copied:
            return CopyOutcome(copied=True, message="Copied to clipboard!")
        return CopyOutcome(copied=False, message="Clipboard unavailable, copy the output manually")

    def clear(self) -> None:
        """Reset input, output and the last result."""
        self.input_text = ""
        self.output_text = ""
        self.last_result = None
