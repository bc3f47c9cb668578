"""
Secure API key storage using the OS keychain.

Supports:
- Windows: Windows Credential Manager
- macOS: macOS Keychain
- Linux: Secret Service API (GNOME Keyring, KWallet)

Usage:
    from core.secrets import SecretStore

    store = SecretStore()
    store.set("sk_live_...")
    key = store.get()        # "" when nothing is stored
    store.delete()
"""

import logging

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

# Keychain entry holding the API key
SERVICE_NAME = "hypewell-studio"
KEYRING_USER = "api-key"


class SecretStore:
    """Opaque get/set/delete access to the keychain entry for the API key."""

    def __init__(self, service: str = SERVICE_NAME, user: str = KEYRING_USER):
        self.service = service
        self.user = user

    def get(self) -> str:
        """
        Read the stored API key.

        Returns:
            The key, or "" when nothing is stored or the keychain is unusable
        """
        try:
            value = keyring.get_password(self.service, self.user)
        except KeyringError as e:
            logger.debug(f"Keychain read failed: {e}")
            return ""
        if value:
            logger.debug("Retrieved API key from secure keychain")
        return value or ""

    def set(self, value: str) -> bool:
        """
        Store the API key in the keychain.

        Returns:
            True if stored, False if the keychain is unavailable
        """
        try:
            keyring.set_password(self.service, self.user, value)
        except KeyringError as e:
            logger.warning(f"Failed to store API key in keychain: {e}")
            return False
        logger.info("Stored API key in secure keychain")
        return True

    def delete(self) -> bool:
        """
        Remove the API key from the keychain.

        Returns:
            True if an entry was removed, False if none existed or the
            keychain is unavailable
        """
        try:
            keyring.delete_password(self.service, self.user)
        except PasswordDeleteError:
            logger.debug("No API key in keychain to delete")
            return False
        except KeyringError as e:
            logger.warning(f"Failed to delete API key from keychain: {e}")
            return False
        logger.info("Deleted API key from secure keychain")
        return True
