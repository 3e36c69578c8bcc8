"""
src/api_client — HTTP client for the question generation service.

Module layout
-------------
config.py     — service settings imported from config/api_config.py
errors.py     — APIError hierarchy (transport, server, codec, cancellation)
schemas.py    — ProblemPattern and request/response models (Japanese wire keys)
codec.py      — request encoding, schema-checked response decoding
endpoints.py  — Operation → Endpoint(path, method) catalog
transport.py  — send with retry/backoff, CancelToken
client.py     — GenerationClient with the four generation operations
batch.py      — concurrent fan-out over the single-item endpoints

Public interface
----------------
Generate questions:
    client = GenerationClient(base_url)
    client.generate_single_qa(answer, existing_questions, pattern)
    client.generate_batch_qa(answers, pattern)
    client.generate_single_mcq(answer, existing_questions, pattern)
    client.generate_batch_mcq(answers, pattern)

Fan out single-item calls:
    generate_single_qa_in_parallel(client, pairs)
    generate_single_mcq_in_parallel(client, pairs)
    fan_out(client.generate_single_qa, pairs)
"""

from .batch import (
    GenerationParams,
    ItemResult,
    fan_out,
    generate_single_mcq_in_parallel,
    generate_single_qa_in_parallel,
)
from .client import GenerationClient
from .endpoints import Endpoint, Operation, resolve
from .errors import (
    APIError,
    CancelledError,
    DecodingError,
    EncodingError,
    InvalidURLError,
    MalformedResponseError,
    ServerError,
    TransportError,
)
from .schemas import (
    BatchGenerationRequest,
    MCQResponseItem,
    ProblemPattern,
    QAResponseItem,
    SingleGenerationRequest,
)
from .transport import CancelToken, send_with_retry

__all__ = [
    # Client
    "GenerationClient",
    "CancelToken",
    "send_with_retry",
    # Fan-out
    "fan_out",
    "generate_single_qa_in_parallel",
    "generate_single_mcq_in_parallel",
    "GenerationParams",
    "ItemResult",
    # Catalog
    "Endpoint",
    "Operation",
    "resolve",
    # Schemas
    "ProblemPattern",
    "SingleGenerationRequest",
    "BatchGenerationRequest",
    "QAResponseItem",
    "MCQResponseItem",
    # Errors
    "APIError",
    "InvalidURLError",
    "EncodingError",
    "TransportError",
    "ServerError",
    "DecodingError",
    "MalformedResponseError",
    "CancelledError",
]
