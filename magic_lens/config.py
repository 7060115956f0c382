"""Configuration and constants for the Magic Lens project."""

from dataclasses import dataclass


# Ratio between an overlay's font size and its rendered height.
# Roughly matches the cap height of the recognized line.
FONT_SIZE_RATIO = 0.8

# How long the copy button shows its acknowledgment
COPY_FEEDBACK_MS = 2000

# Shown once to the user whenever recognition fails
RECOGNITION_FAILURE_NOTICE = "Failed to analyze image. Please try again."

DEFAULT_LANGUAGE = "eng"


@dataclass(frozen=True)
class RulePreset:
    """Built-in entity rule definition."""
    key: str
    icon: str
    title: str
    pattern: str
    ignore_case: bool = False


# Whitespace as JavaScript regexes define \s. Patterns compile in ASCII mode,
# where \s would miss non-breaking and other Unicode spaces.
JS_WHITESPACE = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

_PHONE_SEPARATOR = r"[-." + JS_WHITESPACE + r"]?"

# Built-in entity rules, in panel order.
# Patterns are intentionally permissive (phones and urls over-match).
BUILTIN_RULES: tuple[RulePreset, ...] = (
    RulePreset(
        key="phones",
        icon="\N{TELEPHONE RECEIVER}",
        title="Phone Numbers",
        pattern=(
            r"(\+?\d{1,3}" + _PHONE_SEPARATOR + r")?"
            r"(\(?\d{3}\)?" + _PHONE_SEPARATOR + r")?"
            r"\d{3}" + _PHONE_SEPARATOR + r"\d{4}"
        ),
    ),
    RulePreset(
        key="emails",
        icon="\N{E-MAIL SYMBOL}",
        title="Emails",
        pattern=r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}",
    ),
    RulePreset(
        key="urls",
        icon="\N{LINK SYMBOL}",
        title="Links",
        pattern=(
            r"\b(https?://|www\.)?[-a-zA-Z0-9@:%._\+~#=]{1,256}"
            r"\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_\+.~#?&//=]*)"
        ),
    ),
    RulePreset(
        key="dates",
        icon="\N{CALENDAR}",
        title="Dates",
        pattern=(
            r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"
            r"|\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]* "
            r"\d{1,2}(?:st|nd|rd|th)?,? \d{4}\b"
        ),
        ignore_case=True,
    ),
)


# File handling - formats Pillow can decode
SUPPORTED_IMAGE_EXTENSIONS: tuple[str, ...] = (
    # JPEG formats
    '.jpg', '.jpeg', '.jpe',
    # PNG
    '.png',
    # BMP
    '.bmp', '.dib',
    # TIFF
    '.tiff', '.tif',
    # WebP
    '.webp',
    # GIF (first frame only)
    '.gif',
    # Portable formats
    '.pbm', '.pgm', '.ppm', '.pnm',
)


# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
