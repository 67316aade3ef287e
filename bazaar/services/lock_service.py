import uuid

import redis

from bazaar.utils.retry import redis_retry
from bazaar.utils.settings import REDIS_URL, CHECKOUT_LOCK_TTL_SECONDS
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nikt nie wcisnie sie miedzy GET a DEL
#wiec lock zwalnia tylko ten kto go wzial (token)


class LockService:
    """
    -lock na checkout kupujacego (jeden checkout naraz per buyer)
    -zwalnianie locka tylko przez wlasciciela tokena
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _checkout_key(buyer_id: int) -> str:
        return f"checkout:{buyer_id}:lock"

    @staticmethod
    def new_token() -> str:
        return uuid.uuid4().hex

    @redis_retry()
    def acquire_checkout_lock(self, buyer_id: int, token: str, ttl: int = CHECKOUT_LOCK_TTL_SECONDS) -> bool:
        key = self._checkout_key(buyer_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:7:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True, #tylko jesli nie istnieje
                ex=ttl, #wygasa sam gdyby proces padl w trakcie checkoutu
            )
        )

    @redis_retry()
    def release_checkout_lock(self, buyer_id: int, token: str) -> bool:
        key = self._checkout_key(buyer_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
