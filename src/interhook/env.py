from typing import Self
from os import environ
from uuid import uuid4

from pydantic import BaseModel


INSTANCE = uuid4().hex[:12]


class Env(BaseModel):
    application_id: int
    public_key: str
    bot_token: str
    interaction_path: str = '/interaction'
    host: str = '0.0.0.0'
    port: int = 8080
    dev: bool = True
    ack_first: bool = True
    guild_fallback: bool = False

    @classmethod
    def new(cls) -> Self:
        return cls.model_validate({
            'application_id': environ.get('APPLICATION_ID'),
            'public_key': environ.get('PUBLIC_KEY'),
            'bot_token': environ.get('BOT_TOKEN'),
            'interaction_path': environ.get('INTERACTION_PATH', '/interaction'),
            'host': environ.get('HOST', '0.0.0.0'),
            'port': int(environ.get('PORT', '8080')),
            'dev': environ.get('DEV', '1') != '0',
            'ack_first': environ.get('ACK_FIRST', '1') != '0',
            'guild_fallback': environ.get('GUILD_FALLBACK', '0') != '0'
        })
