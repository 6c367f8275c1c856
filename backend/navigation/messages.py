"""
User-facing text.

Spoken confirmations are localized by display language (fallback: English).
Toast messages for recognition errors are English only.
"""

from __future__ import annotations

from typing import Final

from constants import BASE_LANGUAGE, BASE_SPEECH_LOCALE, SPEECH_LOCALES


SPOKEN_MESSAGES: Final[dict[str, dict[str, str]]] = {
    "not_found": {
        "English": "Not Found",
        "Tamil": "கிடைக்கவில்லை",
        "Hindi": "नहीं मिला",
        "Malayalam": "കണ്ടെത്തിയില്ല",
        "Telugu": "కనుగొనబడలేదు",
        "Kannada": "ಸಿಗಲಿಲ್ಲ",
        "Bengali": "পাওয়া যায়নি",
        "Arabic": "غير موجود",
        "Urdu": "نہیں ملا",
        "Srilanka": "හමු නොවීය",
    },
    "login_required": {
        "English": "Please login first. Taking you to login page.",
        "Tamil": "முதலில் உள்நுழையவும். உள்நுழைவு பக்கத்திற்கு அழைத்துச் செல்கிறேன்.",
        "Hindi": "कृपया पहले लॉगिन करें। लॉगिन पेज पर ले जा रहे हैं।",
        "Malayalam": "ദയവായി ആദ്യം ലോഗിൻ ചെയ്യുക. ലോഗിൻ പേജിലേക്ക് കൊണ്ടുപോകുന്നു.",
        "Telugu": "దయచేసి మొదట లాగిన్ చేయండి. లాగిన్ పేజీకి తీసుకెళ్తున్నాము.",
        "Kannada": "ದಯವಿಟ್ಟು ಮೊದಲು ಲಾಗಿನ್ ಮಾಡಿ. ಲಾಗಿನ್ ಪುಟಕ್ಕೆ ಕೊಂಡೊಯ್ಯುತ್ತಿದ್ದೇವೆ.",
        "Bengali": "অনুগ্রহ করে প্রথমে লগইন করুন। লগইন পেজে নিয়ে যাচ্ছি।",
        "Arabic": "يرجى تسجيل الدخول أولاً. نأخذك إلى صفحة تسجيل الدخول.",
        "Urdu": "پہلے لاگ ان کریں۔ لاگ ان صفحے پر لے جا رہے ہیں۔",
        "Srilanka": "කරුණාකර මුලින්ම ලොගින් වන්න. ලොගින් පිටුවට ගෙන යමින්.",
    },
    "navigating": {
        "English": "Navigating to",
        "Tamil": "செல்கிறேன்",
        "Hindi": "जा रहे हैं",
        "Malayalam": "പോകുന്നു",
        "Telugu": "వెళ్తున్నాము",
        "Kannada": "ಹೋಗುತ್ತಿದ್ದೇವೆ",
        "Bengali": "যাচ্ছি",
        "Arabic": "الذهاب إلى",
        "Urdu": "جا رہے ہیں",
        "Srilanka": "යමින්",
    },
}


def spoken(key: str, language: str | None) -> str:
    """Localized spoken message; unknown languages fall back to English."""
    table = SPOKEN_MESSAGES[key]
    return table.get(language or BASE_LANGUAGE, table[BASE_LANGUAGE])


def navigating_text(keyword: str, language: str | None) -> str:
    return f"{spoken('navigating', language)} {keyword}"


def locale_for_language(language: str | None) -> str:
    """Speech synthesis locale for a display language."""
    if not language:
        return BASE_SPEECH_LOCALE
    return SPEECH_LOCALES.get(language, BASE_SPEECH_LOCALE)


# -----------------------------------------------------------------------------
# Toasts
# -----------------------------------------------------------------------------

UNSUPPORTED_TITLE: Final[str] = "Not Supported"
UNSUPPORTED_TEXT: Final[str] = "Speech recognition is not supported in this browser."

NO_SPEECH_TITLE: Final[str] = "No Speech"
NO_SPEECH_TEXT: Final[str] = "No speech detected. Please try again."

LISTEN_TIMEOUT_TITLE: Final[str] = "Voice Assistant"
LISTEN_TIMEOUT_TEXT: Final[str] = "Listening timeout. Please try again."

NOT_FOUND_TITLE: Final[str] = "Command Not Found"

VOICE_ERROR_TITLE: Final[str] = "Voice Error"

NETWORK_EXHAUSTED_TEXT: Final[str] = (
    "Voice recognition could not reach the network. "
    "Please use the menu to navigate instead."
)


def not_found_toast_text(keyword: str) -> str:
    return f'"{keyword}" not recognized. Say "help" for available pages.'
