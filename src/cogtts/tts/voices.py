"""Voice catalog for the Cognitive Services text-to-speech API.

Maps each supported voice to its SSML wire name and locale. This may not include
every voice the service offers; see the service documentation for the full list.
"""

from dataclasses import dataclass
from enum import Enum

WIRE_NAME_PREFIX = "Microsoft Server Speech Text to Speech Voice"


class Gender(Enum):
    """Gender of the voice."""

    FEMALE = "Female"
    MALE = "Male"

    @classmethod
    def from_value(cls, value: "Gender | str | None") -> "Gender":
        """Coerce a gender or its name, falling back to FEMALE."""
        if isinstance(value, Gender):
            return value
        if isinstance(value, str) and value.strip().lower() == "male":
            return cls.MALE
        return cls.FEMALE


class VoiceName(Enum):
    """Voices implemented by this client."""

    EN_AU_CATHERINE = "enAUCatherine"
    EN_AU_HAYLEY_RUS = "enAUHayleyRUS"
    EN_CA_LINDA = "enCALinda"
    EN_CA_HEATHER_RUS = "enCAHeatherRUS"
    EN_GB_SUSAN_APOLLO = "enGBSusanApollo"
    EN_GB_HAZEL_RUS = "enGBHazelRUS"
    EN_GB_GEORGE_APOLLO = "enGBGeorgeApollo"
    EN_IE_SEAN = "enIESean"
    EN_IN_HEERA_APOLLO = "enINHeeraApollo"
    EN_IN_PRIYA_RUS = "enINPriyaRUS"
    EN_IN_RAVI_APOLLO = "enINRaviApollo"
    EN_US_ZIRA_RUS = "enUSZiraRUS"
    EN_US_JESSA_RUS = "enUSJessaRUS"
    EN_US_BENJAMIN_RUS = "enUSBenjaminRUS"
    DE_AT_MICHAEL = "deATMichael"
    DE_CH_KARSTEN = "deCHKarsten"
    DE_DE_HEDDA = "deDEHedda"
    DE_DE_HEDDA_RUS = "deDEHeddaRUS"
    DE_DE_STEFAN_APOLLO = "deDEStefanApollo"
    ES_ES_LAURA_APOLLO = "esESLauraApollo"
    ES_ES_HELENA_RUS = "esESHelenaRUS"
    ES_ES_PABLO_APOLLO = "esESPabloApollo"
    ES_MX_HILDA_RUS = "esMXHildaRUS"
    ES_MX_RAUL_APOLLO = "esMXRaulApollo"
    FR_CA_CAROLINE = "frCACaroline"
    FR_CA_HARMONIE_RUS = "frCAHarmonieRUS"
    FR_CH_GUILLAUME = "frCHGuillaume"
    FR_FR_JULIE_APOLLO = "frFRJulieApollo"
    FR_FR_HORTENSE_RUS = "frFRHortenseRUS"

    @classmethod
    def from_string(cls, value: str) -> "VoiceName":
        """Look up a voice by member name ("EN_US_ZIRA_RUS") or short id ("enUSZiraRUS").

        Raises:
            ValueError: If no voice matches
        """
        normalized = value.strip()
        try:
            return cls[normalized.upper()]
        except KeyError:
            pass
        for voice in cls:
            if voice.value.lower() == normalized.lower():
                return voice
        raise ValueError(f"Unknown voice: {value!r}")


@dataclass(frozen=True)
class VoiceInfo:
    """Wire-level description of a voice.

    Attributes:
        locale: BCP-47 locale, e.g. "en-US"
        wire_name: Full service voice name used in SSML
    """

    locale: str
    wire_name: str


def _voice(locale: str, *parts: str) -> VoiceInfo:
    return VoiceInfo(
        locale=locale,
        wire_name=f"{WIRE_NAME_PREFIX} ({', '.join((locale, *parts))})",
    )


VOICE_CATALOG: dict[VoiceName, VoiceInfo] = {
    VoiceName.EN_AU_CATHERINE: _voice("en-AU", "Catherine"),
    VoiceName.EN_AU_HAYLEY_RUS: _voice("en-AU", "HayleyRUS"),
    VoiceName.EN_CA_LINDA: _voice("en-CA", "Linda"),
    VoiceName.EN_CA_HEATHER_RUS: _voice("en-CA", "HeatherRUS"),
    VoiceName.EN_GB_SUSAN_APOLLO: _voice("en-GB", "Susan", "Apollo"),
    VoiceName.EN_GB_HAZEL_RUS: _voice("en-GB", "HazelRUS"),
    VoiceName.EN_GB_GEORGE_APOLLO: _voice("en-GB", "George", "Apollo"),
    VoiceName.EN_IE_SEAN: _voice("en-IE", "Sean"),
    VoiceName.EN_IN_HEERA_APOLLO: _voice("en-IN", "Heera", "Apollo"),
    VoiceName.EN_IN_PRIYA_RUS: _voice("en-IN", "PriyaRUS"),
    VoiceName.EN_IN_RAVI_APOLLO: _voice("en-IN", "Ravi", "Apollo"),
    VoiceName.EN_US_ZIRA_RUS: _voice("en-US", "ZiraRUS"),
    VoiceName.EN_US_JESSA_RUS: _voice("en-US", "JessaRUS"),
    VoiceName.EN_US_BENJAMIN_RUS: _voice("en-US", "BenjaminRUS"),
    VoiceName.DE_AT_MICHAEL: _voice("de-AT", "Michael"),
    VoiceName.DE_CH_KARSTEN: _voice("de-CH", "Karsten"),
    VoiceName.DE_DE_HEDDA: _voice("de-DE", "Hedda"),
    VoiceName.DE_DE_HEDDA_RUS: _voice("de-DE", "HeddaRUS"),
    VoiceName.DE_DE_STEFAN_APOLLO: _voice("de-DE", "Stefan", "Apollo"),
    VoiceName.ES_ES_LAURA_APOLLO: _voice("es-ES", "Laura", "Apollo"),
    VoiceName.ES_ES_HELENA_RUS: _voice("es-ES", "HelenaRUS"),
    VoiceName.ES_ES_PABLO_APOLLO: _voice("es-ES", "Pablo", "Apollo"),
    VoiceName.ES_MX_HILDA_RUS: _voice("es-MX", "HildaRUS"),
    VoiceName.ES_MX_RAUL_APOLLO: _voice("es-MX", "Raul", "Apollo"),
    VoiceName.FR_CA_CAROLINE: _voice("fr-CA", "Caroline"),
    VoiceName.FR_CA_HARMONIE_RUS: _voice("fr-CA", "HarmonieRUS"),
    VoiceName.FR_CH_GUILLAUME: _voice("fr-CH", "Guillaume"),
    VoiceName.FR_FR_JULIE_APOLLO: _voice("fr-FR", "Julie", "Apollo"),
    VoiceName.FR_FR_HORTENSE_RUS: _voice("fr-FR", "HortenseRUS"),
}

DEFAULT_VOICE = VoiceName.EN_US_JESSA_RUS


def resolve_voice(
    voice: VoiceName,
    catalog: dict[VoiceName, VoiceInfo] | None = None,
) -> VoiceInfo:
    """Return the wire name and locale for a voice.

    Voices missing from the catalog resolve to the default voice.
    """
    catalog = VOICE_CATALOG if catalog is None else catalog
    info = catalog.get(voice)
    if info is None:
        info = catalog.get(DEFAULT_VOICE, VOICE_CATALOG[DEFAULT_VOICE])
    return info


def get_voice_locale(voice: VoiceName) -> str:
    """Return the locale of a voice, e.g. "fr-CA"."""
    return resolve_voice(voice).locale


__all__ = [
    "DEFAULT_VOICE",
    "Gender",
    "VOICE_CATALOG",
    "VoiceInfo",
    "VoiceName",
    "get_voice_locale",
    "resolve_voice",
]
