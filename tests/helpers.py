"""Constants and helpers shared by the test modules."""

import hashlib

FAKE_URL = "https://downloads.example.test/v1/linux-amd64/docker-credential-fake"
FAKE_PAYLOAD = b"#!/bin/sh\necho fake credential helper\n"


def sha256_tag(payload: bytes) -> str:
    return "sha256:" + hashlib.sha256(payload).hexdigest()
