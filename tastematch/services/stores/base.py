import json
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from tastematch.services.stores.redis_service import RedisService, redis_service

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonStore:
    """
    Best-effort JSON persistence on top of RedisService.

    Loads return None when the key is missing or the payload does not decode;
    saves report success as a bool and never raise.
    """

    def __init__(self, redis: RedisService | None = None):
        self.redis = redis or redis_service

    async def _load_model(self, key: str, model: type[ModelT]) -> ModelT | None:
        cached = await self.redis.get(key)
        if not cached:
            return None
        try:
            return model.model_validate_json(cached)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to decode {model.__name__} at '{key}': {e}")
            return None

    async def _save_model(self, key: str, value: BaseModel) -> bool:
        return await self.redis.set(key, value.model_dump_json())

    async def _load_list(self, key: str, adapter: TypeAdapter) -> list:
        cached = await self.redis.get(key)
        if not cached:
            return []
        try:
            return adapter.validate_json(cached)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to decode list at '{key}': {e}")
            return []

    async def _save_list(self, key: str, adapter: TypeAdapter, values: list) -> bool:
        return await self.redis.set(key, adapter.dump_json(values).decode("utf-8"))
