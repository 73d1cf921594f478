"""SSML document construction.

Builds the speak/voice/prosody document sent to the synthesis endpoint. Text is
escaped by ElementTree serialization, never by string concatenation.
"""

import re
import xml.etree.ElementTree as ET

from .errors import SsmlBuildError
from .voices import Gender

SSML_NAMESPACE = "http://www.w3.org/2001/10/synthesis"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
SSML_VERSION = "1.0"

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[\\x00-\\x08\\x0b\\x0c\\x0e-\\x1f\\ufffe\\uffff]")


def _xml(attr: str) -> str:
    return f"{{{XML_NAMESPACE}}}{attr}"


def format_pitch(pitch_delta_hz: int) -> str:
    """Format a pitch delta as "<int>Hz", e.g. -5 -> "-5Hz"."""
    return f"{int(pitch_delta_hz)}Hz"


def build_ssml(
    locale: str,
    gender: Gender | str,
    voice_wire_name: str,
    text: str,
    pitch_delta_hz: int = 0,
) -> str:
    """Generate an SSML document for one synthesis request.

    Args:
        locale: Language of the document and voice, e.g. "en-US"
        gender: Voice gender; unknown strings are treated as Female
        voice_wire_name: Full service voice name
        text: Text to speak
        pitch_delta_hz: Pitch adjustment in Hz (plus/minus)

    Returns:
        Serialized SSML without an XML declaration

    Raises:
        SsmlBuildError: If the text cannot be represented in XML
    """
    if not isinstance(text, str):
        raise SsmlBuildError(f"Text must be a string, got {type(text).__name__}")
    if _INVALID_XML_CHARS.search(text):
        raise SsmlBuildError("Text contains characters that are not allowed in XML")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SsmlBuildError(f"Text cannot be encoded as UTF-8: {e}") from e

    # Children inherit the SSML namespace from the xmlns attribute on speak
    speak = ET.Element(
        "speak",
        {"xmlns": SSML_NAMESPACE, "version": SSML_VERSION, _xml("lang"): locale},
    )
    voice = ET.SubElement(
        speak,
        "voice",
        {
            _xml("lang"): locale,
            _xml("gender"): Gender.from_value(gender).value,
            "name": voice_wire_name,
        },
    )
    prosody = ET.SubElement(voice, "prosody", {"pitch": format_pitch(pitch_delta_hz)})
    prosody.text = text

    return ET.tostring(speak, encoding="unicode")


class SsmlRequestBuilder:
    """Callable wrapper around build_ssml for injection into the client."""

    def build(
        self,
        locale: str,
        gender: Gender | str,
        voice_wire_name: str,
        text: str,
        pitch_delta_hz: int = 0,
    ) -> str:
        """Build an SSML document. See build_ssml."""
        return build_ssml(locale, gender, voice_wire_name, text, pitch_delta_hz)


__all__ = [
    "SSML_NAMESPACE",
    "SsmlRequestBuilder",
    "build_ssml",
    "format_pitch",
]
