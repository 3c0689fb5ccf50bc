"""FastAPI service for issuing, signing, verifying and casting ring-signed votes."""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .ballot import cast_vote, generate_keys, sign_vote, verify_vote
from .config import Settings, get_settings
from .encoding import point_to_hex
from .errors import (
    CryptoOperationError,
    InputValidationError,
    InvalidPointError,
    KeyImageReused,
    RingSignatureError,
)
from .store import KeyImageStore

logger = logging.getLogger(__name__)


class GenerateKeysResponse(BaseModel):
    publicKey: str
    privateKey: str
    status: str
    digest: str
    keyCoordinate: str


class SignVoteRequest(BaseModel):
    privateKey: str
    publicKeys: List[str]
    message: str
    caseId: str


class SignVoteResponse(BaseModel):
    signature: str
    keyImage: str


class VerifyVoteRequest(BaseModel):
    publicKeys: List[str]
    signature: str
    keyImage: str
    message: str
    caseId: str


class VerifyVoteResponse(BaseModel):
    isValid: bool


class CastVoteResponse(BaseModel):
    accepted: bool
    reason: str | None = None
    keyImage: str | None = None
    recordedAt: str | None = None


class KeyImageEntry(BaseModel):
    keyImage: str
    recordedAt: str


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, KeyImageReused):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (InputValidationError, InvalidPointError, ValueError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, CryptoOperationError):
        logger.error("Crypto operation failed: %s", exc)
        return HTTPException(status_code=500, detail="Cryptographic operation failed")
    logger.error("Request failed: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="RingVote", description="Anonymous one-time voting keys attested by ring signatures")
    stores: List[KeyImageStore] = []

    def _store() -> KeyImageStore:
        if not stores:
            stores.append(KeyImageStore(settings.key_image_store))
        return stores[0]

    @app.post("/keys/generate", response_model=GenerateKeysResponse)
    async def keys_generate() -> GenerateKeysResponse:
        return GenerateKeysResponse(**generate_keys())

    @app.post("/votes/sign", response_model=SignVoteResponse)
    async def votes_sign(request: SignVoteRequest) -> SignVoteResponse:
        try:
            payload = sign_vote(
                request.privateKey,
                request.publicKeys,
                request.message,
                request.caseId,
                max_ring_size=settings.max_ring_size,
            )
        except (RingSignatureError, ValueError) as exc:
            raise _to_http(exc) from exc
        return SignVoteResponse(**payload)

    @app.post("/votes/verify", response_model=VerifyVoteResponse)
    async def votes_verify(request: VerifyVoteRequest) -> VerifyVoteResponse:
        try:
            valid = verify_vote(
                request.publicKeys,
                request.signature,
                request.keyImage,
                request.message,
                request.caseId,
                max_ring_size=settings.max_ring_size,
            )
        except (RingSignatureError, ValueError) as exc:
            raise _to_http(exc) from exc
        return VerifyVoteResponse(isValid=valid)

    @app.post("/votes/cast", response_model=CastVoteResponse)
    async def votes_cast(request: VerifyVoteRequest) -> CastVoteResponse:
        try:
            result = cast_vote(
                _store(),
                request.publicKeys,
                request.signature,
                request.keyImage,
                request.message,
                request.caseId,
                max_ring_size=settings.max_ring_size,
            )
        except (RingSignatureError, ValueError) as exc:
            raise _to_http(exc) from exc
        return CastVoteResponse(**result)

    @app.get("/cases/{case_id}/key-images", response_model=List[KeyImageEntry])
    async def case_key_images(case_id: str) -> List[KeyImageEntry]:
        try:
            records = _store().list_case(case_id)
        except (RingSignatureError, ValueError) as exc:
            raise _to_http(exc) from exc
        return [
            KeyImageEntry(keyImage=point_to_hex(record.key_image), recordedAt=record.recorded_at)
            for record in records
        ]

    return app


app = create_app()


__all__ = ["app", "create_app"]
