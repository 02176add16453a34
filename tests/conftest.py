"""Shared fixtures and helpers for Circle client tests."""

import base64
import json

import httpx
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from circle_wallets.client import CircleClient

# Standard IDs
WALLET_ID = "01234567-89ab-cdef-0123-456789abcdef"
WALLET_SET_ID = "0189bc61-7fe4-70f3-8a1b-0d14bd7e7d2b"
TX_ID = "aabbccdd-eeff-0011-2233-445566778899"
TOKEN_ID = "7adb2b7d-c9cd-5164-b2d4-b73b088274dc"
IDEMPOTENCY_KEY = "c1c2ac79-4a8d-4c0d-9d9a-6f0ad4a1f5f3"
ENTITY_SECRET = "a1" * 32
API_KEY = "TEST_API_KEY:abc:def"
BASE_URL = "http://test/v1/w3s/"

# One RSA-2048 keypair stands in for Circle's entity public key.
PRIVATE_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
PUBLIC_KEY_PEM = PRIVATE_KEY.public_key().public_bytes(
    encoding=serialization.Encoding.PEM,
    format=serialization.PublicFormat.SubjectPublicKeyInfo,
).decode("ascii")

PUBLIC_KEY_PATH = "/v1/w3s/config/entity/publicKey"


def decrypt_ciphertext(ciphertext: str, private_key=PRIVATE_KEY) -> str:
    """Decrypt a Base64 entity secret ciphertext back to hex."""
    plaintext = private_key.decrypt(
        base64.b64decode(ciphertext),
        padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA256()),
            algorithm=hashes.SHA256(),
            label=None,
        ),
    )
    return plaintext.hex()


def make_handler(responses: dict, calls: list = None):
    """Create a mock handler from a (method, path) -> (status, body) mapping.

    The public key endpoint is served automatically unless overridden.
    Every request is appended to ``calls`` when given.
    """
    routes = {("GET", PUBLIC_KEY_PATH): (200, {"data": {"publicKey": PUBLIC_KEY_PEM}})}
    routes.update(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        key = (request.method, request.url.path)
        if key in routes:
            status, body = routes[key]
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)
        return httpx.Response(404, json={"code": 404, "message": "Not found"})

    return handler


def make_client(handler, **kwargs) -> CircleClient:
    """Create a CircleClient with MockTransport."""
    transport = httpx.MockTransport(handler)
    http_client = httpx.AsyncClient(transport=transport, base_url=BASE_URL)
    return CircleClient(API_KEY, base_url=BASE_URL, http_client=http_client, **kwargs)


def body_of(request: httpx.Request) -> dict:
    return json.loads(request.content)


def posts(calls: list) -> list:
    """Requests from ``calls`` other than the public key fetch."""
    return [r for r in calls if r.url.path != PUBLIC_KEY_PATH]
