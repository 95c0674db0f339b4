# gate/auth/application/verify_login.py
from __future__ import annotations

from gate.auth.domain.errors import AuthProviderError
from gate.auth.domain.outcome import Allowed, AuthOutcome, Denied, DenialReason
from gate.auth.infrastructure.oauth import fetch_access_token
from gate.auth.infrastructure.user import UserStore, find_or_create
from gate.auth.infrastructure.verifiers import RelationshipVerifier
from gate.common.logging_utils import get_logger


def authenticate(verifier: RelationshipVerifier, access_token: str, store: UserStore) -> AuthOutcome:
    """Resuelve perfil + relación y lo convierte en Allowed/Denied.

    El store solo se toca cuando la relación se confirma.
    """
    log = get_logger()
    try:
        profile_id = verifier.fetch_profile_id(access_token)
        related    = verifier.check(access_token)
    except AuthProviderError as err:
        log.error("error del proveedor: %s", err)
        return Denied(DenialReason.PROVIDER_ERROR, str(err))

    if not related:
        log.info("%s: perfil %s denegado (%s)", verifier.provider, profile_id, verifier.denial_reason.value)
        return Denied(verifier.denial_reason)

    user = find_or_create(store, verifier.provider, profile_id)
    log.info("%s: perfil %s autorizado", verifier.provider, profile_id)
    return Allowed(user)


def complete_login(verifier: RelationshipVerifier, store: UserStore) -> AuthOutcome:
    """Callback OAuth: intercambio de token y luego ``authenticate``."""
    try:
        access_token = fetch_access_token(verifier.provider)
    except AuthProviderError as err:
        get_logger().error("error del proveedor: %s", err)
        return Denied(DenialReason.PROVIDER_ERROR, str(err))
    return authenticate(verifier, access_token, store)
