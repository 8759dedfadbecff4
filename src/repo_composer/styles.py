from enum import Enum
from typing import NamedTuple


class Style(str, Enum):
    ELECTRONIC = "electronic"
    ROCK = "rock"
    HARDROCK = "hardrock"
    HEAVY_METAL = "heavy-metal"
    POP = "pop"
    JAZZ = "jazz"
    CLASSICAL = "classical"
    HIP_HOP = "hip-hop"
    AMBIENT = "ambient"


AUTO = "auto"
DEFAULT_STYLE = Style.ELECTRONIC

STYLE_NAMES = [s.value for s in Style]


class StyleProfile(NamedTuple):
    instruments: list[str]
    adjectives: list[str]
    production: str


STYLE_TABLE: dict[Style, StyleProfile] = {
    Style.ELECTRONIC: StyleProfile(
        instruments=["analog synthesizers", "drum machines", "arpeggiators", "sub bass", "vocoder"],
        adjectives=["pulsing", "glitchy", "hypnotic", "futuristic"],
        production="Layered synth textures, sidechained pads and precise quantized rhythms.",
    ),
    Style.ROCK: StyleProfile(
        instruments=["electric guitars", "bass guitar", "live drums", "hammond organ"],
        adjectives=["driving", "raw", "anthemic", "energetic"],
        production="Warm overdriven guitars, punchy live drums and a band-in-a-room feel.",
    ),
    Style.HARDROCK: StyleProfile(
        instruments=["distorted guitars", "power chords", "thundering drums", "gritty bass"],
        adjectives=["loud", "swaggering", "gritty", "powerful"],
        production="Big riff-driven mix with crunchy amps and soaring guitar solos.",
    ),
    Style.HEAVY_METAL: StyleProfile(
        instruments=["down-tuned guitars", "double kick drums", "shredding lead guitar", "heavy bass"],
        adjectives=["crushing", "relentless", "dark", "epic"],
        production="Tight palm-muted riffs, blast beats and a wall of high-gain guitars.",
    ),
    Style.POP: StyleProfile(
        instruments=["bright synths", "piano", "clap percussion", "layered vocals"],
        adjectives=["catchy", "upbeat", "polished", "uplifting"],
        production="Radio-ready mix with a big hook, vocal harmonies and a clean groove.",
    ),
    Style.JAZZ: StyleProfile(
        instruments=["upright bass", "saxophone", "brushed drums", "piano", "trumpet"],
        adjectives=["smooth", "improvised", "swinging", "sophisticated"],
        production="Intimate live-room recording with extended chords and call-and-response solos.",
    ),
    Style.CLASSICAL: StyleProfile(
        instruments=["string orchestra", "grand piano", "woodwinds", "french horns", "timpani"],
        adjectives=["elegant", "structured", "majestic", "timeless"],
        production="Concert hall ambience with dynamic swells and contrapuntal themes.",
    ),
    Style.HIP_HOP: StyleProfile(
        instruments=["808 bass", "boom-bap drums", "vinyl samples", "turntable scratches"],
        adjectives=["rhythmic", "confident", "streetwise", "bold"],
        production="Head-nodding beat with crisp snares, deep low end and room for rhythmic flow.",
    ),
    Style.AMBIENT: StyleProfile(
        instruments=["evolving pads", "field recordings", "granular textures", "soft piano"],
        adjectives=["ethereal", "spacious", "calm", "meditative"],
        production="Slow-moving textures, long reverb tails and gentle dynamic motion.",
    ),
}

GENERIC_PROFILE = StyleProfile(
    instruments=["genre-typical instruments"],
    adjectives=["expressive", "distinctive"],
    production="Production choices that are idiomatic for the requested genre.",
)


def get_profile(style: str) -> StyleProfile:
    try:
        return STYLE_TABLE[Style(style)]
    except ValueError:
        return GENERIC_PROFILE
