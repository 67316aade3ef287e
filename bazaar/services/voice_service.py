"""Voice ordering: recognised speech text -> product intent -> cart.

Speech recognition and synthesis run on the client. This module only maps a
transcript to one of a fixed set of product intents, builds the phrase the
client should speak back, and feeds ``{productId, quantity}`` into the same
cart ``add`` as manual ordering.
"""
import re
import unicodedata
from dataclasses import dataclass

from sqlalchemy.orm import Session

from bazaar.data.models.product import ProductModel
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import Language
from bazaar.domain.errors import NotFoundError, ValidationError
from bazaar.repos.product_repo import ProductRepo
from bazaar.services.cart_service import CartService
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VoiceCommand:
    key: str
    name_key: str
    name_en: str
    name_hi: str
    name_te: str

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name_en, self.name_hi, self.name_te)

    def spoken_name(self, language: Language) -> str:
        if language == Language.HINDI:
            return self.name_hi
        if language == Language.TELUGU:
            return self.name_te
        return self.name_en


VOICE_COMMANDS = (
    VoiceCommand("1", "onion", "Onion", "प्याज़", "ఉల్లిపాయ"),
    VoiceCommand("2", "tomato", "Tomato", "टमाटर", "టమోటా"),
    VoiceCommand("3", "potato", "Potato", "आलू", "బంగాళాదుంప"),
    VoiceCommand("4", "coriander", "Coriander", "धनिया", "కొత్తిమీర"),
    VoiceCommand("5", "chilli", "Chilli", "मिर्च", "మిర్చి"),
    VoiceCommand("6", "ginger", "Ginger", "अदरक", "అల్లం"),
)

_LOCALES = {
    Language.HINDI: "hi-IN",
    Language.TELUGU: "te-IN",
    Language.ENGLISH: "en-IN",
}

_SELECTED = {
    Language.HINDI: "{name} चुना गया",
    Language.TELUGU: "{name} ఎంచుకోబడింది",
    Language.ENGLISH: "{name} selected",
}

_ANNOUNCEMENTS = {
    Language.HINDI: "प्याज़ के लिए 1 दबाएं, टमाटर के लिए 2 दबाएं",
    Language.TELUGU: "ఉల్లిపాయ కోసం 1 నొక్కండి, టమోటా కోసం 2 నొక్కండి",
    Language.ENGLISH: "Press 1 for onion, press 2 for tomato",
}


def _normalize(text: str) -> str:
    # nukta (ज़) bywa zapisana jako jeden znak albo dwa
    return unicodedata.normalize("NFC", text).casefold()


def speech_locale(language: Language) -> str:
    return _LOCALES[language]


def announcement(language: Language) -> str:
    return _ANNOUNCEMENTS[language]


def match_intent(transcript: str) -> VoiceCommand | None:
    """
    First command (in keypad order) whose name in any supported language occurs
    in the transcript. Only if no name matches, a keypad key spoken as a
    standalone number ("press 2") selects the command, so "1 kg tomato" is a
    tomato and not an onion.
    """
    text = _normalize(transcript)

    for command in VOICE_COMMANDS:
        if any(_normalize(name) in text for name in command.names):
            return command

    numbers = set(re.findall(r"\d+", text))
    for command in VOICE_COMMANDS:
        if command.key in numbers:
            return command
    return None


def describe_intent(command: VoiceCommand | None, language: Language) -> dict:
    if command is None:
        return {"matched": False, "locale": speech_locale(language)}

    spoken = command.spoken_name(language)
    return {
        "matched": True,
        "key": command.key,
        "name_key": command.name_key,
        "spoken_name": spoken,
        "locale": speech_locale(language),
        "confirmation": _SELECTED[language].format(name=spoken),
    }


class VoiceService:
    def __init__(self, db: Session):
        self.products = ProductRepo(db)
        self.cart_service = CartService(db)

    def resolve_product(self, command: VoiceCommand, wholesaler_id: int | None = None) -> ProductModel:
        """Produkt z katalogu, ktorego nazwa (w dowolnym jezyku) odpowiada intencji."""
        wanted = {_normalize(name) for name in command.names}

        for product in self.products.list_products(wholesaler_id=wholesaler_id):
            names = {_normalize(n) for n in (product.name, product.name_hi, product.name_te) if n}
            if names & wanted:
                return product

        raise NotFoundError(f"No product in catalog for '{command.name_key}'")

    def add_to_cart(
        self,
        user: UserModel,
        transcript: str,
        language: Language,
        quantity: int = 1,
        wholesaler_id: int | None = None,
    ):
        command = match_intent(transcript)
        if command is None:
            raise ValidationError("No product recognised in transcript", field="transcript")

        product = self.resolve_product(command, wholesaler_id)
        logger.info(f"Voice intent '{command.name_key}' -> product {product.id} for user {user.id}")

        item = self.cart_service.add_product(user, product.id, quantity)
        return describe_intent(command, language), item
