"""Prompt construction for ID photo edits.

Style options arrive as short keys (``blue``, ``male-suit``...). The labels the
original Japanese UI sends are accepted as aliases of the same keys. Anything
unrecognized falls back to the defaults below instead of failing.
"""

BACKGROUND_COLORS: dict[str, str] = {
    "blue": "#a0d8ef",
    "white": "#ffffff",
    "gray": "#f0f0f0",
}
DEFAULT_BACKGROUND_COLOR = "#ffffff"

OUTFIT_DESCRIPTIONS: dict[str, str] = {
    "male-suit": "dark-colored business suit with a white collared shirt and a simple tie",
    "female-suit": "dark-colored business suit with a white blouse",
}
DEFAULT_OUTFIT_DESCRIPTION = "professional business attire"

OPTION_ALIASES: dict[str, str] = {
    "青": "blue",
    "白": "white",
    "グレー": "gray",
    "grey": "gray",
    "男性用スーツ": "male-suit",
    "女性用スーツ": "female-suit",
    "その他": "other",
}

BEAUTIFICATION_ENABLED = (
    "6.  **Beautification:** Apply subtle, natural skin smoothing to reduce minor blemishes, "
    "but preserve permanent features like moles and scars. Slightly enhance eye clarity."
)
BEAUTIFICATION_DISABLED = "6.  **Beautification:** All cosmetic adjustments are disabled."

ID_PHOTO_PROMPT = (
    "As an expert AI photo editor, transform the user's photo into a professional ID photo "
    "following these rules:\n\n"
    "1.  **Clothing:** Change the attire to a {outfit}. Ensure it fits naturally.\n"
    "2.  **Background:** Replace the original background with a solid, smooth color: {background}.\n"
    "3.  **Composition:** Center the subject, looking forward. Adjust head tilt so the eye-line "
    "is horizontal. Ensure proper headroom for an ID photo.\n"
    "4.  **Lighting & Quality:** Re-light the subject with soft, professional studio lighting. "
    "Eliminate harsh shadows. The final image must be sharp, clear, high-resolution, and "
    "suitable for printing.\n"
    "5.  **Identity:** CRITICAL: Do not alter core facial features (eyes, nose, mouth, face shape). "
    "The subject must be easily identifiable.\n"
    "{beautification}\n\n"
    "Output only the final image file."
)


def _normalize(option: str) -> str:
    key = option.strip()
    return OPTION_ALIASES.get(key, key.lower())


def background_color_hex(background_color: str) -> str:
    return BACKGROUND_COLORS.get(_normalize(background_color), DEFAULT_BACKGROUND_COLOR)


def outfit_description(outfit: str) -> str:
    return OUTFIT_DESCRIPTIONS.get(_normalize(outfit), DEFAULT_OUTFIT_DESCRIPTION)


def build_prompt(outfit: str, background_color: str, enable_beautification: bool) -> str:
    """Render the edit instruction sent alongside the user's photo.

    Disabling beautification renders an explicit "disabled" rule; the clause
    is never simply left out.
    """
    return ID_PHOTO_PROMPT.format(
        outfit=outfit_description(outfit),
        background=background_color_hex(background_color),
        beautification=BEAUTIFICATION_ENABLED if enable_beautification else BEAUTIFICATION_DISABLED,
    )
