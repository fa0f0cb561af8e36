"""Command handlers and the command registry."""

from teslable._api.actions import ACTION_HANDLERS, ActionContext, ActionHandler, action_handler
from teslable._api.data import DATA_HANDLERS, DataHandler, data_handler

__all__ = [
    "ACTION_HANDLERS",
    "DATA_HANDLERS",
    "ActionContext",
    "ActionHandler",
    "DataHandler",
    "action_handler",
    "data_handler",
]
