"""
Content moderation helpers shared by reviews and comments.
"""

from better_profanity import profanity

from marketplace.catalog.domain.models import ContentFlag


profanity.load_censor_words()


def check_content(text: str) -> str:
    """Return the flag a piece of user content should carry."""
    if text and profanity.contains_profanity(text):
        return ContentFlag.INAPPROPRIATE_LANGUAGE
    return ContentFlag.NONE
