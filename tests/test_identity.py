import base64

import pytest

from workboard.services import identity
from workboard.services.integrity import hash_document, verify_on_chain

PHOTO = base64.b64encode(b"\xff\xd8\xff jpeg bytes").decode()


def test_parse_verdict():
    verdict = identity.parse_verdict('{"isMatch": true, "confidence": 0.92, "reason": "Face matches"}')
    assert verdict == {"is_match": True, "confidence": 0.92, "reason": "Face matches"}


def test_parse_verdict_requires_match_and_reason():
    with pytest.raises(ValueError):
        identity.parse_verdict('{"confidence": 0.4}')


async def test_model_failure_maps_to_no_match(monkeypatch):
    async def broken(image_bytes, name):
        raise RuntimeError("quota exceeded")

    monkeypatch.setattr(identity, "_ask_model", broken)

    result = await identity.verify_identity_match(PHOTO, "Sokha Chan")
    assert result == {"is_match": False, "confidence": None, "reason": "Verification system busy."}


async def test_garbled_model_output_maps_to_no_match(monkeypatch):
    async def garbled(image_bytes, name):
        return "I think so?"

    monkeypatch.setattr(identity, "_ask_model", garbled)

    result = await identity.verify_identity_match(PHOTO, "Sokha Chan")
    assert result["is_match"] is False


async def test_undecodable_image():
    result = await identity.verify_identity_match("***", "Sokha Chan")
    assert result["is_match"] is False


async def test_verify_identity_endpoint(client, candidate, monkeypatch):
    seen = {}

    async def fake_model(image_bytes, name):
        seen["name"] = name
        return '{"isMatch": true, "confidence": 0.8, "reason": "Same person"}'

    monkeypatch.setattr(identity, "_ask_model", fake_model)

    response = await client.post("/verify-identity", json={"image_base64": PHOTO, "name": "Sokha Chan"}, headers=candidate)

    assert response.status_code == 200
    assert response.json() == {"is_match": True, "confidence": 0.8, "reason": "Same person"}
    assert seen["name"] == "Sokha Chan"


async def test_document_fingerprint():
    digest = hash_document(b"abc")
    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    receipt = await verify_on_chain(digest)
    assert receipt["verified"] is True
    assert receipt["transaction_id"].startswith("0x")
