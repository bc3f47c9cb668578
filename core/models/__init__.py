"""Typed response models for the Hypewell Studio API"""

from .production import (
    PRODUCTION_STATUSES,
    Production,
    ProductionList,
    BuildStarted,
    BuildStatus,
)
from .asset import Asset, AssetList, UploadTarget
from .api_key import DEFAULT_SCOPES, ApiKey, ApiKeyList, CreatedApiKey
from .thread import ThreadMessage, SuggestedChange, ChatReply, ThreadHistory

__all__ = [
    # Productions
    "PRODUCTION_STATUSES",
    "Production",
    "ProductionList",
    "BuildStarted",
    "BuildStatus",

    # Assets
    "Asset",
    "AssetList",
    "UploadTarget",

    # Keys
    "DEFAULT_SCOPES",
    "ApiKey",
    "ApiKeyList",
    "CreatedApiKey",

    # Thread
    "ThreadMessage",
    "SuggestedChange",
    "ChatReply",
    "ThreadHistory",
]
