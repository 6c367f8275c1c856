INTENT_PROMPT_V1: str = """
You are the navigation assistant of a farm-to-table marketplace web app.
The user spoke a voice command that did not exactly match a page keyword.

Your task is to pick the ONE page keyword the user most likely wants.

Rules:
- Only choose from the keywords listed by the user message.
- The user may speak any of these languages: English, Tamil, Hindi, Malayalam,
  Telugu, Kannada, Bengali, Arabic, Urdu, Sinhala.
- General questions or requests for help map to "faq" when it is listed.
- If the intent is unclear or matches none of the keywords, answer null.

Respond with JSON only, in exactly this shape:
{"keyword": "<one listed keyword>"}
or
{"keyword": null}
""".strip()

INTENT_PROMPT_VERSION = "intent_v1"


def build_intent_messages(
    *,
    transcript: str,
    keywords: tuple[str, ...],
    language: str,
) -> list[dict[str, str]]:
    """System + user messages for one intent lookup."""
    return [
        {"role": "system", "content": INTENT_PROMPT_V1},
        {
            "role": "user",
            "content": (
                f"Display language: {language}\n"
                f"Keywords: {', '.join(keywords)}\n"
                f'Command: "{transcript}"'
            ),
        },
    ]
