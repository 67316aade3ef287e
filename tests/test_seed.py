from sqlalchemy import func, select

from bazaar.data.models.product import ProductModel
from bazaar.data.seed import DEMO_PRODUCTS, seed
from bazaar.services.voice_service import VOICE_COMMANDS, VoiceService, match_intent


def test_seed_once(db_session):
    assert seed(db_session) is True
    assert seed(db_session) is False

    count = db_session.execute(select(func.count()).select_from(ProductModel)).scalar_one()
    assert count == len(DEMO_PRODUCTS)


def test_every_voice_command_has_a_demo_product(db_session):
    seed(db_session)
    svc = VoiceService(db_session)

    for command in VOICE_COMMANDS:
        assert svc.resolve_product(match_intent(command.name_en)).name == command.name_en
