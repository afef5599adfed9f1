"""
Locator Catalog - every UI query the scenarios use, defined once
"""
from ..models import Locator

AUTH_ERROR_MESSAGE = "The supplied auth credential is incorrect, malformed or has expired."
HOME_MARKER_TEXT = "Activity Streak"

VIEW = "android.view.View"
BUTTON = "android.widget.Button"
IMAGE = "android.widget.ImageView"
EDIT_TEXT = "android.widget.EditText"


def desc_contains(text: str, widget: str = "*", description: str = "") -> Locator:
    """Element whose content-desc contains text."""
    return Locator(
        value=f"//{widget}[contains(@content-desc, '{text}')]",
        description=description or text,
    )


def desc_equals(text: str, widget: str = "*", description: str = "") -> Locator:
    """Element whose content-desc is exactly text."""
    return Locator(
        value=f'//{widget}[@content-desc="{text}"]',
        description=description or text,
    )


def of_class(widget: str, description: str = "") -> Locator:
    return Locator(value=f"//{widget}", description=description or widget)


def within(parent: Locator, xpath: str, description: str) -> Locator:
    """Query resolved relative to the element parent points at."""
    return Locator(value=xpath, description=description, parent=parent)


# Onboarding
TAP_TO_START = desc_contains("Tap to Start", IMAGE)
START_BUTTON = of_class(BUTTON, "onboarding button")
SAW_ADVERTISEMENT = desc_equals("Saw an advertisement")
CONTINUE = desc_equals("Continue")

# Login
CREDENTIAL_FIELD = of_class(EDIT_TEXT, "credential field")
SIGN_IN = desc_equals("Sign in", BUTTON)
LOGIN_WITH_PASSWORD = desc_equals("Login with Password", BUTTON)
AUTH_ERROR = desc_equals(AUTH_ERROR_MESSAGE, VIEW, "authentication error")

# Home
HOME_MARKER = desc_contains(HOME_MARKER_TEXT, VIEW, "home page")
NOTIFICATION_ICON = desc_equals("1", VIEW, "notification icon")
NOTIFICATION_BADGE = within(NOTIFICATION_ICON, f"./{VIEW}[2]", "notification badge")
CLAIM_MEDALS = desc_equals("Claim medals", VIEW)
FEEDBACK_POPUP = desc_equals("Enjoying Prodigy Baby?", VIEW, "feedback popup")
