"""Tests for mapping recognised speech to product intents and into the cart."""

import pytest

from bazaar.domain.enums import Language
from bazaar.domain.errors import NotFoundError, ValidationError
from bazaar.services.voice_service import (
    VoiceService,
    announcement,
    describe_intent,
    match_intent,
    speech_locale,
)


class TestMatchIntent:
    @pytest.mark.parametrize(
        "transcript, expected",
        [
            ("Tomato please", "tomato"),
            ("मुझे टमाटर चाहिए", "tomato"),
            ("ఉల్లిపాయ కావాలి", "onion"),
            ("GINGER", "ginger"),
            ("press 3", "potato"),
            ("1 kg tomato", "tomato"),
        ],
    )
    def test_matches(self, transcript, expected):
        assert match_intent(transcript).name_key == expected

    def test_nukta_spelling_variants(self):
        decomposed = "\u092a\u094d\u092f\u093e\u091c\u093c"
        precomposed = "\u092a\u094d\u092f\u093e\u095b"

        assert match_intent(decomposed).name_key == "onion"
        assert match_intent(precomposed).name_key == "onion"

    def test_numbers_inside_other_numbers_do_not_match(self):
        assert match_intent("10 kilo") is None

    def test_no_match(self):
        assert match_intent("hello") is None


class TestDescribeIntent:
    def test_hindi_confirmation(self):
        intent = describe_intent(match_intent("tomato"), Language.HINDI)

        assert intent == {
            "matched": True,
            "key": "2",
            "name_key": "tomato",
            "spoken_name": "टमाटर",
            "locale": "hi-IN",
            "confirmation": "टमाटर चुना गया",
        }

    def test_english_confirmation(self):
        intent = describe_intent(match_intent("onion"), Language.ENGLISH)

        assert intent["confirmation"] == "Onion selected"
        assert intent["locale"] == "en-IN"

    def test_unmatched(self):
        assert describe_intent(None, Language.TELUGU) == {"matched": False, "locale": "te-IN"}

    def test_locales_and_announcements(self):
        assert speech_locale(Language.TELUGU) == "te-IN"
        assert announcement(Language.ENGLISH) == "Press 1 for onion, press 2 for tomato"


class TestVoiceToCart:
    @pytest.fixture()
    def vendor(self, make_user):
        return make_user("ravi", role="vendor")

    @pytest.fixture()
    def wholesaler(self, make_user):
        return make_user("mandi", role="wholesaler")

    def test_adds_matching_product(self, db_session, vendor, wholesaler, make_product):
        tomato = make_product(wholesaler, "Tomato", "28.50", name_hi="टमाटर")

        intent, item = VoiceService(db_session).add_to_cart(vendor, "टमाटर", Language.HINDI, quantity=3)

        assert intent["name_key"] == "tomato"
        assert item.product_id == tomato.id
        assert item.quantity == 3

    def test_voice_adds_merge_with_manual_adds(self, db_session, vendor, wholesaler, make_product):
        make_product(wholesaler, "Onion", "32.00")
        svc = VoiceService(db_session)

        svc.add_to_cart(vendor, "onion", Language.ENGLISH, quantity=2)
        _, item = svc.add_to_cart(vendor, "press 1", Language.ENGLISH, quantity=3)

        assert item.quantity == 5

    def test_restricted_to_wholesaler(self, db_session, vendor, wholesaler, make_user, make_product):
        other = make_user("mandi-b", role="wholesaler")
        make_product(wholesaler, "Onion", "32.00")
        theirs = make_product(other, "Onion", "30.00")

        _, item = VoiceService(db_session).add_to_cart(
            vendor, "onion", Language.ENGLISH, wholesaler_id=other.id
        )

        assert item.product_id == theirs.id

    def test_unrecognised_transcript(self, db_session, vendor):
        with pytest.raises(ValidationError):
            VoiceService(db_session).add_to_cart(vendor, "hello", Language.ENGLISH)

    def test_no_product_in_catalog(self, db_session, vendor):
        with pytest.raises(NotFoundError):
            VoiceService(db_session).add_to_cart(vendor, "ginger", Language.ENGLISH)
