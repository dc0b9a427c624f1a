from .registry import (
    AutocompleteCallback,
    CommandRegistry,
    CommandCallback,
    CommandBundle,
    CommandScope,
    CommandKey,
    GLOBAL,
)
from .chain import (
    HandlerPredicate,
    HandlerAction,
    HandlerChain,
    HandlerEntry,
)
from .dispatch import InteractionReply, dispatch
from .verify import interaction_validator, verify_signature
from .server import create_app, serve
from .version import VERSION
from .client import Client
from .env import Env


__all__ = (  # noqa: RUF022
    'VERSION',
    'Client',
    'Env',
    # Registry
    'GLOBAL',
    'AutocompleteCallback',
    'CommandBundle',
    'CommandCallback',
    'CommandKey',
    'CommandRegistry',
    'CommandScope',
    # Chain
    'HandlerAction',
    'HandlerChain',
    'HandlerEntry',
    'HandlerPredicate',
    # Dispatch
    'InteractionReply',
    'dispatch',
    # Verify
    'interaction_validator',
    'verify_signature',
    # Server
    'create_app',
    'serve',
)
