from __future__ import annotations


class GwasStoreError(RuntimeError):
    pass


class StoreUnavailableError(GwasStoreError):
    """The key/value store reports itself as not available."""


class StoreReadError(GwasStoreError):
    pass


class StoreWriteError(GwasStoreError):
    """The store write call failed or was rejected by the signer."""


class DecodeError(GwasStoreError, ValueError):
    pass


class NotFoundError(GwasStoreError):
    pass


class AuthorizationError(GwasStoreError):
    pass


class InvalidStateError(GwasStoreError):
    pass
